# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from messages_modules.errors import LoaderError
from messages_modules.loaders import load_properties, parse_properties


def test_separators_and_comments():
	text = """
# comment
! also a comment
equals = one
colon:two
space three
   indented=four
empty =
"""
	assert parse_properties(text) == {
		"equals": "one",
		"colon": "two",
		"space": "three",
		"indented": "four",
		"empty": "",
	}


def test_line_continuation_joins_and_strips_leading_whitespace():
	text = "long = first \\\n        second \\\n third\nnext = x\n"
	assert parse_properties(text) == {"long": "first second third", "next": "x"}


def test_even_backslashes_do_not_continue():
	text = "path = C:\\\\\nother = y\n"
	assert parse_properties(text) == {"path": "C:\\", "other": "y"}


def test_escapes():
	text = r"key\ with\=seps = tab\there\nnew \u00e9t\u00E9 \# \z"
	assert parse_properties(text) == {"key with=seps": "tab\there\nnew été # z"}


def test_malformed_unicode_escape_raises():
	with pytest.raises(LoaderError, match="malformed"):
		parse_properties("bad = \\u12G4", origin="x.properties")


def test_later_duplicate_wins():
	assert parse_properties("k = 1\nk = 2\n") == {"k": "2"}


def test_load_properties_reads_utf8_file(tmp_path: Path) -> None:
	path = tmp_path / "Greeting.fr.properties"
	path.write_text("greeting = Bonjour à tous\n", encoding="utf-8")
	assert load_properties(str(path)) == {"greeting": "Bonjour à tous"}


def test_missing_file_raises_os_error(tmp_path: Path) -> None:
	with pytest.raises(OSError):
		load_properties(str(tmp_path / "missing.properties"))
