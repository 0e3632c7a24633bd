"""
eks_bluegreen.buildspec

CodeBuild build specification for the image build + rollout job.

Responsibilities:
- Produce the `pre_build` / `build` / `post_build` command lists as plain data.
- Own the rollout decision: first-time `kubectl apply` vs. in-place image update.

Kept free of CDK types so the commands can be asserted without synthesizing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from eks_bluegreen.settings import Settings

BUILDSPEC_VERSION = "0.2"

# Workloads are addressed by their ECR URI plus the commit being built.
FRONT_IMAGE = "$ECR_REPO_URI_FRONT:$TAG"
BACK_IMAGE = "$ECR_REPO_URI_BACK:$TAG"


@dataclass(frozen=True, slots=True)
class BuildSpecParams:
    namespace: str = "rolling-alb"
    front_dir: str = "CICD-rolling-front"
    back_dir: str = "CICD-rolling-back"
    front_deployment: str = "rolling-front"
    back_deployment: str = "rolling-server"
    front_manifest: str = "front.yaml"
    back_manifest: str = "back.yaml"
    db_manifest: str = "db.yaml"

    @classmethod
    def from_settings(cls, settings: Settings) -> BuildSpecParams:
        return cls(
            namespace=settings.k8s_namespace,
            front_dir=settings.front_dir,
            back_dir=settings.back_dir,
            front_deployment=settings.front_deployment,
            back_deployment=settings.back_deployment,
            front_manifest=settings.front_manifest,
            back_manifest=settings.back_manifest,
            db_manifest=settings.db_manifest,
        )


def pre_build_commands(*, docker_login: bool = True) -> list[str]:
    commands = [
        "env",
        "export TAG=${CODEBUILD_RESOLVED_SOURCE_VERSION}",
        "export AWS_ACCOUNT_ID=$(aws sts get-caller-identity --query Account --output=text)",
        # Writes the kubeconfig for $CLUSTER_NAME (see docker_assets/entrypoint.sh).
        "/usr/local/bin/entrypoint.sh",
        "echo Logging in to Amazon ECR",
    ]
    if docker_login:
        commands.append(
            "docker login --username ${DOCKER_USERNAME} --password ${DOCKER_PASSWORD}"
        )
    commands.append(
        "aws ecr get-login-password --region $AWS_DEFAULT_REGION"
        " | docker login --username AWS --password-stdin"
        " $AWS_ACCOUNT_ID.dkr.ecr.$AWS_DEFAULT_REGION.amazonaws.com"
    )
    return commands


def build_commands(params: BuildSpecParams) -> list[str]:
    # The back dir is entered relative to the front dir; order matters.
    return [
        f"cd {params.front_dir}",
        f"docker build -t {FRONT_IMAGE} .",
        f"docker push {FRONT_IMAGE}",
        f"cd ../{params.back_dir}",
        f"docker build -t {BACK_IMAGE} .",
        f"docker push {BACK_IMAGE}",
    ]


def deploy_decision_command(params: BuildSpecParams) -> str:
    """
    One shell conditional, evaluated from inside the back dir:
    - nothing deployed yet (`isDeployed` is jq's "null"): apply db, back, front manifests
    - otherwise: roll both deployments to the freshly pushed tag
    """

    first_apply = " && ".join(
        [
            f"kubectl apply -f ./{params.db_manifest}",
            f"kubectl apply -f ./{params.back_manifest}",
            f"kubectl apply -f ../{params.front_dir}/{params.front_manifest}",
        ]
    )
    rolling_update = " && ".join(
        [
            _set_image(params.namespace, params.back_deployment, BACK_IMAGE),
            _set_image(params.namespace, params.front_deployment, FRONT_IMAGE),
        ]
    )
    return f'if [[ "$isDeployed" == "null" ]]; then {first_apply}; else {rolling_update}; fi'


def _set_image(namespace: str, deployment: str, image: str) -> str:
    # Container name equals deployment name in the shipped manifests. The kubeconfig
    # written by entrypoint.sh has no default namespace, so it is always explicit.
    return f"kubectl set image -n {namespace} deployment {deployment} {deployment}={image}"


def post_build_commands(params: BuildSpecParams) -> list[str]:
    ns = params.namespace
    return [
        f"kubectl get nodes -n {ns}",
        f"kubectl get deploy -n {ns}",
        f"kubectl get svc -n {ns}",
        f"isDeployed=$(kubectl get deploy -n {ns} -o json | jq '.items[0]')",
        (
            f"deploy8080=$(kubectl get svc -n {ns} -o wide | grep 8080: "
            "| tr ' ' '\\n' | grep app= | sed 's/app=//g')"
        ),
        "echo $isDeployed $deploy8080",
        deploy_decision_command(params),
        f"kubectl get deploy -n {ns}",
        f"kubectl get svc -n {ns}",
    ]


def build_spec(params: BuildSpecParams, *, docker_login: bool = True) -> dict[str, Any]:
    """
    Returns the object handed to `codebuild.BuildSpec.from_object`.
    """

    return {
        "version": BUILDSPEC_VERSION,
        "phases": {
            "pre_build": {"commands": pre_build_commands(docker_login=docker_login)},
            "build": {"commands": build_commands(params)},
            "post_build": {"commands": post_build_commands(params)},
        },
    }


# --- Module Notes -----------------------------------------------------------
# Both pipeline build actions run this same spec; the manual approval between them
# gates the second rollout.
