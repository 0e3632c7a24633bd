"""
eks_bluegreen.components.source

CodeCommit repository holding the application sources and manifests.
"""

from __future__ import annotations

from aws_cdk import Stack
from aws_cdk import aws_codecommit as codecommit
from constructs import Construct

from eks_bluegreen.observability.logging import get_logger

log = get_logger(__name__)


class SourceRepository(Construct):
    def __init__(self, scope: Construct, construct_id: str) -> None:
        super().__init__(scope, construct_id)

        name = f"{Stack.of(self).stack_name}-repo"
        self.repository = codecommit.Repository(self, "CodeCommitRepo", repository_name=name)

        log.info("component_added", component="source", repository_name=name)
