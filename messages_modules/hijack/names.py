# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Scope-unique identifier generation.

Names are derived from a readable seed: `"messages"` becomes `_messages`,
then `_messages2`, `_messages3`, ... while the candidate is already used
anywhere in the module (declared in any scope or referenced as a global).
The returned name is reserved immediately so it is never handed out twice.
"""

from __future__ import annotations

import re

from messages_modules.scope import ModuleScope

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]+")


def identifier_base(seed: str) -> str:
	"""Turn an arbitrary seed into a bare identifier stem (`"get-messages"` -> `getMessages`)."""
	words = [w for w in _NON_IDENTIFIER.split(seed) if w]
	if not words:
		return "ref"
	base = words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])
	base = base.lstrip("_").rstrip("0123456789")
	if not base or base[0].isdigit():
		base = f"ref{base}" if base else "ref"
	return base


def fresh_name(scope: ModuleScope, seed: str) -> str:
	base = identifier_base(seed)
	counter = 1
	while True:
		candidate = f"_{base}" if counter == 1 else f"_{base}{counter}"
		if not scope.has_name(candidate):
			scope.reserve(candidate)
			return candidate
		counter += 1


__all__ = ["fresh_name", "identifier_base"]
