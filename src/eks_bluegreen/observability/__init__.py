"""
eks_bluegreen.observability

Observability package.

Responsibilities:
- Structured logging configuration for synth runs.
"""

# Package marker.
