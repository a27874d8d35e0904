"""Logging helpers for the CLI and API."""

from __future__ import annotations

import logging
import os
import sys

_CONFIGURED = False


def setup_logging(verbose: bool = False) -> None:
	"""Attach a single stderr handler to the ``ciopt`` logger."""
	global _CONFIGURED
	logger = logging.getLogger("ciopt")
	if verbose:
		level = logging.DEBUG
	else:
		level_name = os.environ.get("CIOPT_LOG_LEVEL", "WARNING").upper()
		level = getattr(logging, level_name, logging.WARNING)
	logger.setLevel(level)
	if _CONFIGURED:
		return

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
	logger.addHandler(handler)
	_CONFIGURED = True
	logger.debug("Logging initialized at %s", logging.getLevelName(level))
