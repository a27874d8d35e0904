from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ciopt.aggregate import analyze_config
from ciopt.errors import ConfigError
from ciopt.loader import DEFAULT_CONFIG_PATH, load_config
from ciopt.logging_utils import setup_logging
from ciopt.report import render_json, render_text


logger = logging.getLogger("ciopt.cli")


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="ciopt", description="Find cost and speed optimizations in a CircleCI config"
	)
	parser.add_argument(
		"path",
		nargs="?",
		default=DEFAULT_CONFIG_PATH,
		help=f"Path to the CircleCI config (default: {DEFAULT_CONFIG_PATH})",
	)
	parser.add_argument("--format", choices=["text", "json"], default="text")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	return parser


def cmd_analyze(args: argparse.Namespace) -> int:
	try:
		config = load_config(args.path)
	except ConfigError as e:
		print(f"error: {e.message}", file=sys.stderr)
		print(f"hint: {e.hint}", file=sys.stderr)
		return 1

	result = analyze_config(config)
	if args.format == "json":
		print(render_json(result))
	else:
		print(render_text(result))
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	setup_logging(args.verbose)
	try:
		return cmd_analyze(args)
	except Exception as e:
		logger.debug("Unhandled error", exc_info=True)
		print(f"error: {e}", file=sys.stderr)
		return 1


if __name__ == "__main__":
	sys.exit(main())
