# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Injected-data assembly.

For a source file `dir/Base.ts`, every sibling file named
`Base.<locale>.<extension>` (locale: word characters and `-`) is loaded and
stored under its lowercased locale. The result is one `InjectedMessages`
record, serialized as a JSON literal that can be embedded in source text.

Directory entries are visited in name order; when two files lowercase to the
same locale (`en-US` and `en-us`), the later one wins. Loader exceptions
propagate unchanged and nothing is returned.
"""

from __future__ import annotations

import os
import re
from pathlib import PurePosixPath
from typing import Callable, Dict, Optional, Pattern

from messages_modules.paths import resolve_on_disk
from messages_modules.runtime import InjectedMessages

Loader = Callable[[str], Dict[str, str]]


def messages_file_pattern(base_name: str, messages_file_extension: str) -> Pattern[str]:
	return re.compile(
		rf"^{re.escape(base_name)}\.(?P<locale>[\w-]+)\.{re.escape(messages_file_extension)}$",
		re.ASCII,
	)


def collect_injected_messages(
	source_file_path: str,
	messages_file_extension: str,
	loader: Loader,
	*,
	project_root: Optional[str | os.PathLike] = None,
) -> InjectedMessages:
	source = PurePosixPath(source_file_path)
	directory = resolve_on_disk(str(source.parent), project_root)
	pattern = messages_file_pattern(source.stem, messages_file_extension)
	injected = InjectedMessages(source_file_path=source_file_path)
	with os.scandir(directory) as entries:
		matches = sorted((e for e in entries if e.is_file()), key=lambda e: e.name)
	for entry in matches:
		match = pattern.match(entry.name)
		if match is None:
			continue
		locale = match.group("locale").lower()
		injected.key_value_object_collection[locale] = loader(os.path.join(directory, entry.name))
	return injected


def assemble_injected_messages(
	source_file_path: str,
	messages_file_extension: str,
	loader: Loader,
	*,
	project_root: Optional[str | os.PathLike] = None,
) -> str:
	"""Serialized `InjectedMessages` for one source file."""
	return collect_injected_messages(
		source_file_path,
		messages_file_extension,
		loader,
		project_root=project_root,
	).dumps()


__all__ = ["messages_file_pattern", "collect_injected_messages", "assemble_injected_messages"]
