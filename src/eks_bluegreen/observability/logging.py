"""
eks_bluegreen.observability.logging

Structured logging for synth runs.

Responsibilities:
- Configure `structlog` to emit one JSON object per event on a chosen stream.
- Stamp every event with the service name and the app version that produced the template.
- Scope stack/env fields to a single synth via `synth_context`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

from eks_bluegreen import __version__


def configure_logging(
    *,
    service_name: str,
    level: str,
    stream: TextIO | None = None,
) -> None:
    """
    `stream` defaults to stderr: the cdk CLI relays it, and stdout stays clean for
    `cdk synth` output.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _static_fields({"service": service_name, "version": __version__}),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _static_fields(fields: Mapping[str, Any]):
    # Event-supplied keys win; these are defaults only.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


@contextmanager
def synth_context(*, stack: str, env: str) -> Iterator[None]:
    """
    Binds `stack`/`env` onto every event logged inside the block, including the
    `component_added` events emitted while constructs are built.
    """

    structlog.contextvars.bind_contextvars(stack=stack, env=env)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars("stack", "env")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
