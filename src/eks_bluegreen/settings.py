"""
eks_bluegreen.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for every construct in the stack.
- Hide credentials from repr/logging (e.g., Docker Hub password).
- Offer a cached settings instance for the CDK entrypoint.
"""

from __future__ import annotations

import ipaddress
import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eks_bluegreen.errors import ConfigurationError

_K8S_VERSION_RE = re.compile(r"^1\.\d{1,2}$")


class Settings(BaseSettings):
    """
    Every field maps to an `EKSBG_*` environment variable.
    Defaults reproduce the reference rolling/blue-green deployment layout.
    """

    model_config = SettingsConfigDict(env_prefix="EKSBG_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "eks-bluegreen"
    log_level: str = "INFO"

    # Stack identity / target environment
    stack_id: str = "CdkStackALBEksBg"
    account: str | None = None
    region: str | None = None
    # Cloud assembly directory; None defers to CDK_OUTDIR (set by the cdk CLI).
    outdir: str | None = None

    # Network
    vpc_cidr: str = "10.0.0.0/16"
    nat_gateways: int = Field(default=1, ge=1)
    ingress_port: int = Field(default=80, ge=1, le=65535)

    # Cluster
    kubernetes_version: str = "1.29"
    default_capacity: int = Field(default=2, ge=0)

    # Build
    build_image_directory: str = "docker_assets"
    docker_username: str | None = None
    docker_password: str | None = Field(default=None, repr=False)
    docker_credentials_secret_arn: str | None = None

    # Workload layout inside the source repository / cluster
    k8s_namespace: str = "rolling-alb"
    front_dir: str = "CICD-rolling-front"
    back_dir: str = "CICD-rolling-back"
    front_deployment: str = "rolling-front"
    back_deployment: str = "rolling-server"
    front_manifest: str = "front.yaml"
    back_manifest: str = "back.yaml"
    db_manifest: str = "db.yaml"

    # Release pipeline
    approval_notify_emails: list[str] = Field(default_factory=list)
    trigger_build_on_commit: bool = True

    @field_validator(
        "docker_username", "docker_password", "docker_credentials_secret_arn", mode="before"
    )
    @classmethod
    def _blank_is_unset(cls, v: object) -> object:
        # EKSBG_DOCKER_USERNAME="" means "not configured", not an empty login.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("vpc_cidr")
    @classmethod
    def _check_cidr(cls, v: str) -> str:
        # strict=True rejects host bits (10.0.0.1/16) the same way EC2 does.
        net = ipaddress.ip_network(v, strict=True)
        if net.version != 4:
            raise ValueError("vpc_cidr must be an IPv4 network")
        return str(net)

    @field_validator("kubernetes_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        if not _K8S_VERSION_RE.match(v):
            raise ValueError(f"kubernetes_version must look like '1.29', got {v!r}")
        return v

    @property
    def has_docker_credentials(self) -> bool:
        return bool(self.docker_credentials_secret_arn) or (
            self.docker_username is not None and self.docker_password is not None
        )

    def check(self) -> Settings:
        """
        Cross-field rules pydantic cannot express per-field.
        Raises `ConfigurationError`; returns self for chaining.
        """

        if (self.docker_username is None) != (self.docker_password is None):
            raise ConfigurationError(
                "docker_username and docker_password must be set together"
            )
        if self.docker_credentials_secret_arn and self.docker_username is not None:
            raise ConfigurationError(
                "use either plaintext Docker credentials or docker_credentials_secret_arn, not both"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars when several constructs ask for settings.
    return Settings().check()


# --- Module Notes -----------------------------------------------------------
# Values here end up in the synthesized template; anything secret should move to
# `docker_credentials_secret_arn` rather than plaintext build variables.
