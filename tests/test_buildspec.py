"""
tests.test_buildspec

Build spec and rollout-script tests (no CDK synthesis needed).
"""

from __future__ import annotations

from eks_bluegreen.buildspec import (
    BuildSpecParams,
    build_commands,
    build_spec,
    deploy_decision_command,
    post_build_commands,
    pre_build_commands,
)
from tests.conftest import make_settings


def test_phases_are_declared_in_order() -> None:
    spec = build_spec(BuildSpecParams())

    assert spec["version"] == "0.2"
    assert list(spec["phases"]) == ["pre_build", "build", "post_build"]
    for phase in spec["phases"].values():
        assert phase["commands"]


def test_pre_build_exports_tag_and_logs_into_ecr() -> None:
    cmds = pre_build_commands()

    assert "export TAG=${CODEBUILD_RESOLVED_SOURCE_VERSION}" in cmds
    assert "/usr/local/bin/entrypoint.sh" in cmds
    # Account id must be known before the ECR login that uses it.
    account = next(i for i, c in enumerate(cmds) if c.startswith("export AWS_ACCOUNT_ID="))
    ecr_login = next(i for i, c in enumerate(cmds) if "aws ecr get-login-password" in c)
    assert account < ecr_login
    assert cmds[ecr_login].endswith("$AWS_ACCOUNT_ID.dkr.ecr.$AWS_DEFAULT_REGION.amazonaws.com")


def test_docker_hub_login_is_optional() -> None:
    with_login = pre_build_commands(docker_login=True)
    without_login = pre_build_commands(docker_login=False)

    hub = "docker login --username ${DOCKER_USERNAME} --password ${DOCKER_PASSWORD}"
    assert hub in with_login
    assert hub not in without_login
    assert len(with_login) == len(without_login) + 1


def test_build_pushes_front_then_back_with_commit_tag() -> None:
    cmds = build_commands(BuildSpecParams(front_dir="web", back_dir="api"))

    assert cmds == [
        "cd web",
        "docker build -t $ECR_REPO_URI_FRONT:$TAG .",
        "docker push $ECR_REPO_URI_FRONT:$TAG",
        "cd ../api",
        "docker build -t $ECR_REPO_URI_BACK:$TAG .",
        "docker push $ECR_REPO_URI_BACK:$TAG",
    ]


def test_first_deploy_applies_manifests_db_back_front() -> None:
    cmd = deploy_decision_command(BuildSpecParams())

    assert cmd.startswith('if [[ "$isDeployed" == "null" ]]; then ')
    first, _, rolling = cmd.partition("; else ")
    db = first.index("kubectl apply -f ./db.yaml")
    back = first.index("kubectl apply -f ./back.yaml")
    front = first.index("kubectl apply -f ../CICD-rolling-front/front.yaml")
    assert db < back < front
    assert "set image" not in first
    assert "kubectl apply" not in rolling


def test_existing_deploy_rolls_both_images() -> None:
    cmd = deploy_decision_command(BuildSpecParams())
    _, _, rolling = cmd.partition("; else ")

    assert rolling.endswith("; fi")
    assert (
        "kubectl set image -n rolling-alb deployment rolling-server rolling-server=$ECR_REPO_URI_BACK:$TAG"
        in rolling
    )
    assert (
        "kubectl set image -n rolling-alb deployment rolling-front rolling-front=$ECR_REPO_URI_FRONT:$TAG"
        in rolling
    )


def test_post_build_checks_namespace_before_deciding() -> None:
    params = BuildSpecParams(namespace="shop")
    cmds = post_build_commands(params)

    decision = cmds.index(deploy_decision_command(params))
    check = next(i for i, c in enumerate(cmds) if c.startswith("isDeployed="))
    assert check < decision
    assert cmds[check] == "isDeployed=$(kubectl get deploy -n shop -o json | jq '.items[0]')"
    assert cmds[-2:] == ["kubectl get deploy -n shop", "kubectl get svc -n shop"]


def test_params_follow_settings() -> None:
    settings = make_settings(
        k8s_namespace="blue",
        front_deployment="web",
        back_deployment="api",
        db_manifest="postgres.yaml",
    )
    params = BuildSpecParams.from_settings(settings)

    assert params.namespace == "blue"
    cmd = deploy_decision_command(params)
    assert "kubectl apply -f ./postgres.yaml" in cmd
    assert "kubectl set image -n blue deployment api api=" in cmd
    assert "kubectl set image -n blue deployment web web=" in cmd


def test_rolling_update_uses_configured_namespace() -> None:
    params = BuildSpecParams(namespace="shop")
    cmd = deploy_decision_command(params)
    _, _, rolling = cmd.partition("; else ")

    updates = [part.strip() for part in rolling.removesuffix("; fi").split("&&")]
    assert len(updates) == 2
    for update in updates:
        assert update.startswith("kubectl set image -n shop deployment ")
    assert "isDeployed=$(kubectl get deploy -n shop" in " ".join(post_build_commands(params))
