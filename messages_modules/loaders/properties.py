# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`.properties` messages loader.

Reads the Java properties text format:

  - `#` or `!` starts a comment line,
  - key and value are separated by `=`, `:` or whitespace,
  - a trailing odd backslash continues the logical line,
  - `\\t \\n \\r \\f \\uXXXX` escapes are decoded; any other escaped
    character stands for itself (so keys may contain `\\=` or `\\ `).

Later duplicate keys override earlier ones.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from messages_modules.errors import LoaderError

_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"


def load_properties(messages_file_path: str) -> Dict[str, str]:
	"""Load one `.properties` file into a key/value object."""
	text = Path(messages_file_path).read_text(encoding="utf-8")
	return parse_properties(text, origin=messages_file_path)


def parse_properties(text: str, *, origin: str = "<properties>") -> Dict[str, str]:
	messages: Dict[str, str] = {}
	for line_no, logical in _logical_lines(text):
		key, value = _split_entry(logical)
		messages[_unescape(key, origin, line_no)] = _unescape(value, origin, line_no)
	return messages


def _ends_with_continuation(line: str) -> bool:
	count = len(line) - len(line.rstrip("\\"))
	return count % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
	pending: List[str] = []
	start = 0
	for idx, raw in enumerate(text.splitlines(), start=1):
		line = raw.lstrip(_WHITESPACE)
		if not pending:
			if not line or line[0] in "#!":
				continue
			start = idx
		if _ends_with_continuation(line):
			pending.append(line[:-1])
			continue
		pending.append(line)
		yield start, "".join(pending)
		pending = []
	if pending:
		yield start, "".join(pending)


def _split_entry(line: str) -> Tuple[str, str]:
	idx = 0
	length = len(line)
	while idx < length:
		char = line[idx]
		if char == "\\":
			idx += 2
			continue
		if char in _SEPARATORS or char in _WHITESPACE:
			break
		idx += 1
	key = line[:idx]
	rest = line[idx:].lstrip(_WHITESPACE)
	if rest[:1] and rest[0] in _SEPARATORS:
		rest = rest[1:].lstrip(_WHITESPACE)
	return key, rest


def _unescape(text: str, origin: str, line_no: int) -> str:
	if "\\" not in text:
		return text
	out: List[str] = []
	idx = 0
	length = len(text)
	while idx < length:
		char = text[idx]
		if char != "\\":
			out.append(char)
			idx += 1
			continue
		if idx + 1 >= length:
			idx += 1
			continue
		nxt = text[idx + 1]
		if nxt == "u":
			digits = text[idx + 2 : idx + 6]
			if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
				raise LoaderError(f"{origin}:{line_no}: malformed \\uXXXX escape", path=origin)
			out.append(chr(int(digits, 16)))
			idx += 6
			continue
		out.append(_SIMPLE_ESCAPES.get(nxt, nxt))
		idx += 2
	return "".join(out)


__all__ = ["load_properties", "parse_properties"]
