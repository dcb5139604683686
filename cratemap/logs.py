"""Logging setup, owned by the entrypoints (CLI and server).

Library modules only ever call ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"

_HANDLER_TAG_ATTR = "_cratemap_handler"

_LEVEL_MAP = {
	"DEBUG": logging.DEBUG,
	"INFO": logging.INFO,
	"WARNING": logging.WARNING,
	"WARN": logging.WARNING,
	"ERROR": logging.ERROR,
}


def parse_level(level: Optional[str]) -> int:
	if not level:
		return logging.INFO
	return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def configure_logging(level: Optional[str] = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
	"""Attach a single stderr handler to the package logger; safe to call repeatedly."""
	logger = logging.getLogger("cratemap")
	logger.setLevel(parse_level(level))

	for handler in list(logger.handlers):
		if getattr(handler, _HANDLER_TAG_ATTR, False):
			logger.removeHandler(handler)

	handler = logging.StreamHandler(stream or sys.stderr)
	handler.setFormatter(logging.Formatter(LOG_FORMAT))
	setattr(handler, _HANDLER_TAG_ATTR, True)
	logger.addHandler(handler)
	return logger
