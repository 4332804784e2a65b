# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Named-import hijack.

	import { getMessages } from "messages-modules"
	getMessages("en")

becomes

	import { getMessages } from "messages-modules"
	const _getMessagesFunction = getMessages.bind(_messages);
	_getMessagesFunction("en")

Every use of the imported name is renamed; the import itself is left alone
(its original binding simply becomes unused). An import with no uses is not
touched at all.
"""

from __future__ import annotations

from messages_modules.config import HijackTarget
from messages_modules.parser import ast as A
from messages_modules.scope import ModuleScope

from .matcher import is_matching_import_specifier
from .messages import Messages
from .names import fresh_name
from .statements import StatementSequence


def bound_declaration(name: str, function_name: str, messages_name: str) -> A.VarDecl:
	"""`const <name> = <function_name>.bind(<messages_name>);`"""
	call = A.Call(
		callee=A.Member(object=A.Identifier(name=function_name), property="bind"),
		args=[A.Identifier(name=messages_name)],
	)
	return A.VarDecl(kind="const", declarators=[A.Declarator(id=A.Identifier(name=name), init=call)])


def hijack_named_import(
	sequence: StatementSequence,
	stmt: A.ImportDecl,
	target: HijackTarget,
	scope: ModuleScope,
	messages: Messages,
) -> int:
	"""Hijack every specifier of `stmt` importing `target`; returns how many were hijacked."""
	hijacked = 0
	for specifier in list(stmt.specifiers):
		if not is_matching_import_specifier(specifier, target):
			continue
		current_name = specifier.local.name
		binding = scope.lookup_binding(current_name)
		if binding is None or not binding.references:
			continue
		hijacked_function = fresh_name(scope, f"{target.function}Function")
		for reference in list(binding.references):
			scope.rename_reference(reference, hijacked_function)
		declaration = bound_declaration(hijacked_function, current_name, messages.request_variable())
		sequence.append_after(stmt, declaration)
		scope.register_declaration(declaration)
		hijacked += 1
	return hijacked


__all__ = ["hijack_named_import", "bound_declaration"]
