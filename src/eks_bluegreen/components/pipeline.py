"""
eks_bluegreen.components.pipeline

Four-stage release pipeline: Source -> BuildAndDeploy -> ApproveSwapBG -> SwapBG.

Responsibilities:
- Wire the CodeCommit source into two runs of the same CodeBuild project.
- Gate the second run behind a manual approval.
- Optionally start the build project directly on every commit.
"""

from __future__ import annotations

from collections.abc import Sequence

from aws_cdk import aws_codebuild as codebuild
from aws_cdk import aws_codecommit as codecommit
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as cpactions
from aws_cdk import aws_events_targets as targets
from constructs import Construct

from eks_bluegreen.observability.logging import get_logger

log = get_logger(__name__)

STAGE_NAMES = ("Source", "BuildAndDeploy", "ApproveSwapBG", "SwapBG")


class ReleasePipeline(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        repository: codecommit.IRepository,
        project: codebuild.IProject,
        notify_emails: Sequence[str] = (),
        trigger_build_on_commit: bool = True,
    ) -> None:
        super().__init__(scope, construct_id)

        source_output = codepipeline.Artifact()

        source_action = cpactions.CodeCommitSourceAction(
            action_name="CodeCommit",
            repository=repository,
            output=source_output,
        )
        build_action = cpactions.CodeBuildAction(
            action_name="CodeBuild",
            project=project,
            input=source_output,
            outputs=[codepipeline.Artifact()],
        )
        approval_action = cpactions.ManualApprovalAction(
            action_name="Approve",
            notify_emails=list(notify_emails) or None,
        )
        swap_action = cpactions.CodeBuildAction(
            action_name="CodeBuild",
            project=project,
            input=source_output,
        )

        actions = (source_action, build_action, approval_action, swap_action)
        self.pipeline = codepipeline.Pipeline(
            self,
            "MyPipelineFront",
            stages=[
                codepipeline.StageProps(stage_name=name, actions=[action])
                for name, action in zip(STAGE_NAMES, actions)
            ],
        )

        if trigger_build_on_commit:
            repository.on_commit("OnCommit", target=targets.CodeBuildProject(project))

        log.info(
            "component_added",
            component="pipeline",
            stages=list(STAGE_NAMES),
            notify_emails=len(notify_emails),
            trigger_build_on_commit=trigger_build_on_commit,
        )
