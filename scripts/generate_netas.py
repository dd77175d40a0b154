#!/usr/bin/env python3
"""Run one neta invocation from the command line and print the JSON payload."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from neta.core.errors import ConfigurationError  # noqa: E402
from neta.core.logging import get_logger, setup_logging  # noqa: E402
from neta.core.settings import get_settings  # noqa: E402
from neta.models.diagnostics import ErrorResponse  # noqa: E402
from neta.services.neta_service import build_neta_service  # noqa: E402
from neta.sources.base import FEED_KEYS  # noqa: E402

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--category",
        default=None,
        help=f"Feed category ({', '.join(FEED_KEYS)}); unknown values use the default feed",
    )
    parser.add_argument(
        "--source",
        choices=["newsdata", "rss"],
        default=None,
        help="Override NEWS_SOURCE for this run",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args(argv)


async def run(category: str | None, source: str | None) -> tuple[int, str]:
    settings = get_settings()
    if source:
        settings = settings.model_copy(update={"news_source": source})

    try:
        service = build_neta_service(settings)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1, ErrorResponse(error=str(e)).model_dump_json(indent=2)

    response = await service.generate(category)
    return 0, response.model_dump_json(by_alias=True, indent=2)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=args.log_level)
    exit_code, payload = asyncio.run(run(args.category, args.source))
    print(payload)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
