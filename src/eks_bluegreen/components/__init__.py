"""
eks_bluegreen.components

Reusable CDK constructs, one per concern of the delivery stack.

Responsibilities:
- Network, cluster, registries, source repository, build project, release pipeline.
"""

from eks_bluegreen.components.build import BuildProject
from eks_bluegreen.components.cluster import KubernetesCluster
from eks_bluegreen.components.network import Network
from eks_bluegreen.components.pipeline import ReleasePipeline
from eks_bluegreen.components.registries import ImageRegistries
from eks_bluegreen.components.source import SourceRepository

__all__ = [
    "BuildProject",
    "ImageRegistries",
    "KubernetesCluster",
    "Network",
    "ReleasePipeline",
    "SourceRepository",
]
