"""
eks_bluegreen.__main__

Entrypoint for `python -m eks_bluegreen` (the `app` command in cdk.json).

Responsibilities:
- Load settings.
- Create the app and synthesize the cloud assembly.
- Turn configuration problems into a clear log event and exit status 2.
"""

from __future__ import annotations

import sys

from pydantic import ValidationError

from eks_bluegreen.app import create_app
from eks_bluegreen.errors import ConfigurationError
from eks_bluegreen.observability.logging import configure_logging, get_logger, synth_context
from eks_bluegreen.settings import get_settings

log = get_logger(__name__)


def main() -> int:
    try:
        settings = get_settings()
    except (ValidationError, ConfigurationError) as e:
        # Settings never loaded; log with default fields.
        configure_logging(service_name="eks-bluegreen", level="INFO")
        log.error("config_invalid", error=str(e))
        return 2

    with synth_context(stack=settings.stack_id, env=settings.env):
        try:
            app = create_app(settings=settings, outdir=settings.outdir)
        except ConfigurationError as e:
            log.error("config_invalid", error=str(e))
            return 2

        assembly = app.synth()
        log.info(
            "synth_done",
            stacks=[s.stack_name for s in assembly.stacks],
            outdir=assembly.directory,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
