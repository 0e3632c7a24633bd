"""
eks_bluegreen

Top-level package for the EKS blue/green delivery pipeline CDK app.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
