# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source path normalization.

Injected records identify their source file by a project-relative,
`/`-separated path so compiled output does not depend on where the project
was checked out. The project root is always passed in explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath


def _posix(path: str) -> str:
	if os.sep != "/":
		path = path.replace(os.sep, "/")
	return path


def project_relative_path(file_path: str | PurePath, project_root: str | PurePath) -> str:
	"""
	`file_path` relative to `project_root`, with `/` separators.

	Relative inputs are taken as already relative to the root. Files outside
	the root keep their absolute path.
	"""
	path = Path(file_path)
	root = Path(project_root)
	if not path.is_absolute():
		return _posix(os.path.normpath(str(path))).lstrip("/")
	absolute_root = root if root.is_absolute() else Path(os.path.abspath(root))
	try:
		relative = path.relative_to(absolute_root)
	except ValueError:
		return _posix(str(path))
	return _posix(str(relative)).lstrip("/")


def resolve_on_disk(source_file_path: str, project_root: str | PurePath | None) -> Path:
	"""Where a (possibly project-relative) source path lives on disk."""
	path = Path(source_file_path)
	if path.is_absolute() or project_root is None:
		return path
	return Path(project_root) / path


__all__ = ["project_relative_path", "resolve_on_disk"]
