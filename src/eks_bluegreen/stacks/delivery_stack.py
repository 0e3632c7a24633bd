"""
eks_bluegreen.stacks.delivery_stack

The single deployment unit: cluster, registries, source, build and release pipeline.

Responsibilities:
- Instantiate components in dependency order.
- Wire permissions between the build role, the registries and the cluster.
- Surface the repository identifiers as stack outputs.
"""

from __future__ import annotations

from typing import Any

from aws_cdk import CfnOutput, Stack
from constructs import Construct

from eks_bluegreen.components import (
    BuildProject,
    ImageRegistries,
    KubernetesCluster,
    Network,
    ReleasePipeline,
    SourceRepository,
)
from eks_bluegreen.settings import Settings


class BlueGreenDeliveryStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs: Any,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.network = Network(
            self,
            "Network",
            cidr=settings.vpc_cidr,
            nat_gateways=settings.nat_gateways,
            ingress_port=settings.ingress_port,
        )
        self.cluster = KubernetesCluster(
            self,
            "Kubernetes",
            network=self.network,
            version=settings.kubernetes_version,
            default_capacity=settings.default_capacity,
        )
        self.registries = ImageRegistries(self, "Registries")
        self.source = SourceRepository(self, "Source")
        self.build = BuildProject(
            self,
            "Build",
            settings=settings,
            repository=self.source.repository,
            cluster=self.cluster.cluster,
            registries=self.registries,
        )
        self.release = ReleasePipeline(
            self,
            "Release",
            repository=self.source.repository,
            project=self.build.project,
            notify_emails=settings.approval_notify_emails,
            trigger_build_on_commit=settings.trigger_build_on_commit,
        )

        # The build role pushes both images and rolls them out on the cluster.
        self.registries.grant_pull_push(self.build.role)
        self.cluster.grant_deployer(self.build.role)

        repo = self.source.repository
        CfnOutput(self, "CodeCommitRepoNameFront", value=repo.repository_name)
        CfnOutput(self, "CodeCommitRepoArnFront", value=repo.repository_arn)
        CfnOutput(self, "CodeCommitCloneUrlSshFront", value=repo.repository_clone_url_ssh)
        CfnOutput(self, "CodeCommitCloneUrlHttpFront", value=repo.repository_clone_url_http)


# --- Module Notes -----------------------------------------------------------
# Output ids keep their historical "Front" suffix so existing consumers of the
# stack outputs keep working.
