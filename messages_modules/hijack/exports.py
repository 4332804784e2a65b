# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Named re-export hijack ("rehoming").

	export { a, getMessages as get, b } from "messages-modules"

becomes

	export { a, b } from "messages-modules";
	import { getMessages as _getMessagesImport } from "messages-modules";
	const _getMessagesExport = _getMessagesImport.bind(_messages);
	export { _getMessagesExport as get };

One import/bind/export triple is emitted per hijacked specifier, in specifier
order, and each keeps the external name callers already use. A statement left
without specifiers is removed.
"""

from __future__ import annotations

from typing import List

from messages_modules.config import HijackTarget
from messages_modules.parser import ast as A
from messages_modules.scope import ModuleScope

from .imports import bound_declaration
from .matcher import is_matching_export_specifier
from .messages import Messages
from .names import fresh_name
from .statements import StatementSequence


def hijack_named_export(
	sequence: StatementSequence,
	stmt: A.ExportNamed,
	target: HijackTarget,
	scope: ModuleScope,
	messages: Messages,
) -> int:
	"""Rehome every specifier of `stmt` re-exporting `target`; returns how many were rehomed."""
	matching = [idx for idx, spec in enumerate(stmt.specifiers) if is_matching_export_specifier(spec, target)]
	removed: List[A.ExportSpecifier] = []
	# Pop from the end so the remaining indices stay valid.
	for idx in reversed(matching):
		removed.insert(0, stmt.specifiers.pop(idx))

	for specifier in removed:
		hijacked_import = fresh_name(scope, f"{target.function}Import")
		hijacked_export = fresh_name(scope, f"{target.function}Export")
		triple: List[A.Stmt] = [
			A.ImportDecl(
				specifiers=[A.ImportSpecifier(imported=target.function, local=A.Identifier(name=hijacked_import))],
				source=target.module,
			),
			bound_declaration(hijacked_export, hijacked_import, messages.request_variable()),
			A.ExportNamed(
				specifiers=[A.ExportSpecifier(local=A.Identifier(name=hijacked_export), exported=specifier.exported)],
				source=None,
			),
		]
		for new_stmt in triple:
			sequence.append_after(stmt, new_stmt)
			scope.register_declaration(new_stmt)

	if not stmt.specifiers:
		sequence.remove(stmt)
	return len(removed)


__all__ = ["hijack_named_export"]
