"""
eks_bluegreen.components.registries

ECR repositories for the front and back images.
"""

from __future__ import annotations

from aws_cdk import aws_ecr as ecr
from aws_cdk import aws_iam as iam
from constructs import Construct

from eks_bluegreen.observability.logging import get_logger

log = get_logger(__name__)


class ImageRegistries(Construct):
    def __init__(self, scope: Construct, construct_id: str) -> None:
        super().__init__(scope, construct_id)

        self.front = ecr.Repository(self, "ecrRepoFront")
        self.back = ecr.Repository(self, "ecrRepoBack")

        log.info("component_added", component="registries", repositories=["front", "back"])

    @property
    def repositories(self) -> tuple[ecr.Repository, ecr.Repository]:
        return (self.front, self.back)

    def grant_pull_push(self, grantee: iam.IGrantable) -> None:
        for repo in self.repositories:
            repo.grant_pull_push(grantee)
