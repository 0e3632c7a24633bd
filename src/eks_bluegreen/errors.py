"""
eks_bluegreen.errors

Domain-specific exceptions raised while assembling the stack.

Responsibilities:
- Signal configuration that passes field validation but cannot be synthesized.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Raised for invalid combinations of otherwise valid settings.
    The entrypoint reports it and exits non-zero instead of emitting a template.
    """


# --- Module Notes -----------------------------------------------------------
# Deployment-time failures (build, rollout, approval) are handled by CodeBuild,
# CodePipeline and EKS themselves; nothing here models them.
