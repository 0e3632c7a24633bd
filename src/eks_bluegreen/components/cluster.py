"""
eks_bluegreen.components.cluster

Managed EKS cluster plus its admin role.

Responsibilities:
- Create the cluster inside the shared network with a kubectl layer matching its version.
- Grant deployer roles (the CodeBuild role) cluster-admin access for rollouts.
"""

from __future__ import annotations

from aws_cdk import aws_eks as eks
from aws_cdk import aws_iam as iam
from aws_cdk.lambda_layer_kubectl_v29 import KubectlV29Layer
from aws_cdk.lambda_layer_kubectl_v30 import KubectlV30Layer
from constructs import Construct

from eks_bluegreen.components.network import Network
from eks_bluegreen.errors import ConfigurationError
from eks_bluegreen.observability.logging import get_logger

log = get_logger(__name__)

# kubectl must stay within one minor version of the control plane.
KUBECTL_LAYERS = {
    "1.29": KubectlV29Layer,
    "1.30": KubectlV30Layer,
}


class KubernetesCluster(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        network: Network,
        version: str,
        default_capacity: int,
    ) -> None:
        super().__init__(scope, construct_id)

        layer_cls = KUBECTL_LAYERS.get(version)
        if layer_cls is None:
            raise ConfigurationError(
                f"unsupported kubernetes_version {version!r}; "
                f"supported: {', '.join(sorted(KUBECTL_LAYERS))}"
            )

        self.admin_role = iam.Role(
            self,
            "AdminRole",
            assumed_by=iam.AccountRootPrincipal(),
        )

        self.cluster = eks.Cluster(
            self,
            "Cluster",
            version=eks.KubernetesVersion.of(version),
            security_group=network.security_group,
            vpc=network.vpc,
            default_capacity=default_capacity,
            masters_role=self.admin_role,
            output_cluster_name=True,
            kubectl_layer=layer_cls(self, "KubectlLayer"),
        )

        self._deployers: set[str] = set()

        log.info(
            "component_added",
            component="cluster",
            version=version,
            default_capacity=default_capacity,
        )

    def grant_deployer(self, role: iam.IRole) -> None:
        """
        Map `role` to system:masters and let it describe the cluster (needed by
        `aws eks update-kubeconfig`). Repeated calls for the same role are no-ops.
        """

        key = role.node.path
        if key in self._deployers:
            return
        self._deployers.add(key)

        self.cluster.aws_auth.add_masters_role(role)
        role.add_to_principal_policy(
            iam.PolicyStatement(
                actions=["eks:DescribeCluster"],
                resources=[self.cluster.cluster_arn],
            )
        )
        log.info("deployer_granted", role=key)
