"""
eks_bluegreen.components.build

CodeBuild project that builds, pushes and rolls out both images.

Responsibilities:
- Build the custom (privileged, docker-in-docker) build image from a local asset.
- Expose cluster/registry identifiers and Docker Hub credentials as build variables.
- Attach the build spec from `eks_bluegreen.buildspec`.
"""

from __future__ import annotations

from pathlib import Path

from aws_cdk import Stack
from aws_cdk import aws_codebuild as codebuild
from aws_cdk import aws_codecommit as codecommit
from aws_cdk import aws_eks as eks
from aws_cdk import aws_iam as iam
from constructs import Construct

from eks_bluegreen.buildspec import BuildSpecParams, build_spec
from eks_bluegreen.components.registries import ImageRegistries
from eks_bluegreen.errors import ConfigurationError
from eks_bluegreen.observability.logging import get_logger
from eks_bluegreen.settings import Settings

log = get_logger(__name__)

_Var = codebuild.BuildEnvironmentVariable


class BuildProject(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        repository: codecommit.IRepository,
        cluster: eks.ICluster,
        registries: ImageRegistries,
    ) -> None:
        super().__init__(scope, construct_id)

        image_dir = Path(settings.build_image_directory).resolve()
        if not (image_dir / "Dockerfile").is_file():
            raise ConfigurationError(f"no Dockerfile in build_image_directory {image_dir}")

        env_vars: dict[str, codebuild.BuildEnvironmentVariable] = {
            "CLUSTER_NAME": _Var(value=cluster.cluster_name),
            "ECR_REPO_URI_FRONT": _Var(value=registries.front.repository_uri),
            "ECR_REPO_URI_BACK": _Var(value=registries.back.repository_uri),
        }
        env_vars.update(_docker_credentials(settings))

        spec = build_spec(
            BuildSpecParams.from_settings(settings),
            docker_login=settings.has_docker_credentials,
        )

        self.project = codebuild.Project(
            self,
            "MyProject",
            project_name=Stack.of(self).stack_name,
            source=codebuild.Source.code_commit(repository=repository),
            environment=codebuild.BuildEnvironment(
                build_image=codebuild.LinuxBuildImage.from_asset(
                    self, "CustomImage", directory=str(image_dir)
                ),
                privileged=True,
            ),
            environment_variables=env_vars,
            build_spec=codebuild.BuildSpec.from_object(spec),
        )

        log.info(
            "component_added",
            component="build",
            image_directory=str(image_dir),
            variables=sorted(env_vars),
        )

    @property
    def role(self) -> iam.IRole:
        role = self.project.role
        if role is None:  # pragma: no cover
            raise RuntimeError("CodeBuild project was created without a service role")
        return role


def _docker_credentials(settings: Settings) -> dict[str, codebuild.BuildEnvironmentVariable]:
    arn = settings.docker_credentials_secret_arn
    if arn:
        secret = codebuild.BuildEnvironmentVariableType.SECRETS_MANAGER
        return {
            "DOCKER_USERNAME": _Var(type=secret, value=f"{arn}:username"),
            "DOCKER_PASSWORD": _Var(type=secret, value=f"{arn}:password"),
        }
    if settings.docker_username is not None and settings.docker_password is not None:
        return {
            "DOCKER_USERNAME": _Var(value=settings.docker_username),
            "DOCKER_PASSWORD": _Var(value=settings.docker_password),
        }
    return {}


# --- Module Notes -----------------------------------------------------------
# Plaintext credentials land in the template; prefer docker_credentials_secret_arn
# outside of dev.
