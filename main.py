# Entry point for the venue map designer.

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import config
from app import run_app
from storage import load_template

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="venue-map", description=config.WINDOW_TITLE)
    parser.add_argument("template", nargs="?", help=f"map template to open (*{config.TEMPLATE_EXTENSION} or .json)")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="logging level (default: %(default)s)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=config.LOG_FORMAT)

    template = None
    if args.template:
        try:
            template = load_template(args.template)
        except (OSError, ValueError, KeyError) as exc:
            logger.error("Could not open %s: %s", args.template, exc)
            return 1
    run_app(template, args.template)
    return 0


if __name__ == "__main__":
    sys.exit(main())
