# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""`.json` messages loader: a single object of string values."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from messages_modules.errors import LoaderError


def load_json(messages_file_path: str) -> Dict[str, str]:
	text = Path(messages_file_path).read_text(encoding="utf-8")
	try:
		data = json.loads(text)
	except json.JSONDecodeError as exc:
		raise LoaderError(f"{messages_file_path}: invalid JSON: {exc.msg}", path=messages_file_path) from exc
	if not isinstance(data, dict):
		raise LoaderError(f"{messages_file_path}: messages must be a JSON object", path=messages_file_path)
	for key, value in data.items():
		if not isinstance(value, str):
			raise LoaderError(
				f"{messages_file_path}: value for {key!r} must be a string",
				path=messages_file_path,
			)
	return data


__all__ = ["load_json"]
