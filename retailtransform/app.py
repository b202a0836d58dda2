import argparse
import sys
from threading import Event
from typing import List, Optional

from . import __version__
from .config import VALID_LOG_LEVELS, Settings, load_settings
from .database import open_store
from .env import load_env
from .errors import ConfigError, RetailTransformError
from .logger import StructuredLogger, get_logger
from .models import OutputRecord
from .output import write_records
from .pipeline import run_pipeline


def export_products(
    settings: Settings,
    logger: StructuredLogger,
    cancel_event: Optional[Event] = None,
) -> List[OutputRecord]:
    """Open the configured store, run the pipeline once and release the store."""
    with open_store(settings.database) as session:
        url = session.get_bind().url
        logger.debug(
            "Connected to database", url=url.render_as_string(hide_password=True)
        )
        return run_pipeline(
            session,
            role_filter=settings.role_filter,
            logger=logger,
            cancel_event=cancel_event,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retailtransform",
        description="Export a batch of products with their authors as JSON",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="Override LOG_LEVEL for this run",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present (DB_HOST, DB_USER, DATABASE_URL, etc.)
    load_env()
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_settings()
    except ConfigError as e:
        get_logger(level=args.log_level or "INFO").error(
            f"Invalid configuration: {e}", error_type="ConfigError"
        )
        raise SystemExit(1)

    logger = get_logger(
        level=args.log_level or settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_dir is not None,
    )

    try:
        records = export_products(settings, logger)
    except RetailTransformError as e:
        logger.error(f"Export failed: {e}", error_type=type(e).__name__)
        raise SystemExit(1)

    write_records(records, sys.stdout)


if __name__ == "__main__":
    main()
