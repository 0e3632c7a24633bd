"""
tests.conftest

Shared fixtures for synthesizing the delivery stack.

Responsibilities:
- Build test settings pointing at the repo's build image asset.
- Synthesize the default stack once per module (EKS synth is slow).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from eks_bluegreen.settings import Settings
from eks_bluegreen.stacks import BlueGreenDeliveryStack

ROOT = Path(__file__).resolve().parents[1]
ASSETS_DIR = ROOT / "docker_assets"


@dataclass
class Synthesized:
    stack: BlueGreenDeliveryStack
    template: Template

    def logical_id(self, construct: Any) -> str:
        return self.stack.get_logical_id(construct.node.default_child)


def make_settings(**overrides: Any) -> Settings:
    overrides.setdefault("env", "test")
    overrides.setdefault("build_image_directory", str(ASSETS_DIR))
    return Settings(**overrides)


def synthesize(settings: Settings, *, stack_id: str = "TestStack") -> Synthesized:
    app = cdk.App()
    stack = BlueGreenDeliveryStack(app, stack_id, settings=settings)
    return Synthesized(stack=stack, template=Template.from_stack(stack))


def policy_statements(template: Template) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for res in template.find_resources("AWS::IAM::Policy").values():
        out.extend(res["Properties"]["PolicyDocument"]["Statement"])
    return out


def actions_of(statement: dict[str, Any]) -> list[str]:
    action = statement.get("Action", [])
    return [action] if isinstance(action, str) else list(action)


def dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


@pytest.fixture(scope="module")
def default_stack() -> Synthesized:
    return synthesize(make_settings())


def build_env_vars(template: Template) -> dict[str, dict[str, Any]]:
    projects = template.find_resources("AWS::CodeBuild::Project")
    props = next(iter(projects.values()))["Properties"]
    return {v["Name"]: v for v in props["Environment"]["EnvironmentVariables"]}
