"""
eks_bluegreen.app

CDK app factory.

Responsibilities:
- Configure structured logging once per process.
- Resolve the target environment (explicit settings first, CDK CLI defaults second).
- Instantiate the delivery stack and apply common tags.
"""

from __future__ import annotations

import os

import aws_cdk as cdk

from eks_bluegreen.observability.logging import configure_logging, get_logger
from eks_bluegreen.settings import Settings
from eks_bluegreen.stacks import BlueGreenDeliveryStack

log = get_logger(__name__)


def resolve_environment(settings: Settings) -> cdk.Environment:
    # Both None -> environment-agnostic stack.
    return cdk.Environment(
        account=settings.account or os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=settings.region or os.getenv("CDK_DEFAULT_REGION"),
    )


def create_app(*, settings: Settings, outdir: str | None = None) -> cdk.App:
    """
    Returns a fully populated (not yet synthesized) app.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)
    settings.check()

    app = cdk.App(outdir=outdir)
    env = resolve_environment(settings)

    log.info(
        "synth_start",
        stack_id=settings.stack_id,
        account=env.account,
        region=env.region,
    )

    stack = BlueGreenDeliveryStack(
        app,
        settings.stack_id,
        settings=settings,
        env=env,
        description="EKS cluster with ECR, CodeCommit, CodeBuild and a blue/green release pipeline",
    )

    cdk.Tags.of(stack).add("Project", settings.service_name)
    cdk.Tags.of(stack).add("Environment", settings.env)

    return app
