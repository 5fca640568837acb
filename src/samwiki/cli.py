"""Command-line interface for Sam."""

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from samwiki import __version__
from samwiki.config import Settings
from samwiki.core.errors import WikiError
from samwiki.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="samwiki",
        description="Serve a directory of Markdown files as a wiki",
        epilog="Each option falls back to its SAM_* environment variable.",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--addr", help="address to listen (SAM_ADDR, default 127.0.0.1:6250)")
    parser.add_argument("--dir", help="wiki root directory (SAM_DIR, default ./)")
    parser.add_argument("--base", help="server base URL (SAM_BASE, default /)")
    parser.add_argument("--home", help="page / redirects to (SAM_HOME, default Home)")
    parser.add_argument(
        "--debug", "-d", action="store_true", default=None, help="enable debug logging"
    )
    parser.add_argument(
        "--hide-drafts",
        action="store_true",
        default=None,
        help="do not serve pages marked draft",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from the environment, overridden by the given flags."""
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key in Settings.model_fields and value is not None
    }
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(settings.debug)

    from samwiki.main import create_app

    try:
        app = create_app(settings)
    except WikiError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Starting server...")
    logger.info("Listen address: %s", settings.addr)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
