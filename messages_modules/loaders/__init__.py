# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Locale data loaders, keyed by messages file extension.

A loader maps a messages file path to a key/value object. Any exception it
raises aborts compilation of the file being processed.
"""

from __future__ import annotations

from typing import Callable, Dict

from messages_modules.errors import ConfigurationError

from .json_loader import load_json
from .properties import load_properties, parse_properties

Loader = Callable[[str], Dict[str, str]]

LOADERS: Dict[str, Loader] = {
	"properties": load_properties,
	"json": load_json,
}


def loader_for_extension(extension: str) -> Loader:
	loader = LOADERS.get(extension.lstrip(".").lower())
	if loader is None:
		known = ", ".join(sorted(LOADERS))
		raise ConfigurationError(f"no messages loader for extension {extension!r} (known: {known})")
	return loader


__all__ = ["Loader", "LOADERS", "loader_for_extension", "load_properties", "parse_properties", "load_json"]
