"""Console entry point: `glean-mcp` / `python -m glean_mcp`."""

from __future__ import annotations

import asyncio
import sys

from glean_mcp.config import load_settings
from glean_mcp.errors import ConfigurationError
from glean_mcp.logger import configure_logging, get_logger
from glean_mcp.server import create_server

log = get_logger("glean_mcp.cli")


def main() -> None:
    """Load settings, configure logging and serve over stdio. Exits 1 on a fatal error."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging("console", "INFO")
        log.error("fatal configuration error", error=str(e))
        sys.exit(1)

    configure_logging(settings.logging.format, settings.logging.level)

    try:
        asyncio.run(create_server(settings).run_stdio())
    except KeyboardInterrupt:
        pass
    except Exception:
        log.exception("fatal error in main()")
        sys.exit(1)
