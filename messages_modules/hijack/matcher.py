# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Target matching.

A statement hijacks a target only when both the module and the function
match: partial matches (name only, or module only) never trigger a hijack.
For imports the function is compared with the *imported* name, for
re-exports with the *local* name (the name the origin module exports).
"""

from __future__ import annotations

from messages_modules.config import HijackTarget
from messages_modules.parser import ast as A


def matches_module(stmt: A.Stmt, target: HijackTarget) -> bool:
	if isinstance(stmt, A.ImportDecl):
		return stmt.source == target.module
	if isinstance(stmt, A.ExportNamed) and stmt.source is not None:
		return stmt.source == target.module
	return False


def is_matching_import_specifier(specifier: A.Node, target: HijackTarget) -> bool:
	return isinstance(specifier, A.ImportSpecifier) and specifier.imported == target.function


def is_matching_export_specifier(specifier: A.ExportSpecifier, target: HijackTarget) -> bool:
	return specifier.local.name == target.function


def matches_function(stmt: A.Stmt, target: HijackTarget) -> bool:
	if isinstance(stmt, A.ImportDecl):
		return any(is_matching_import_specifier(s, target) for s in stmt.specifiers)
	if isinstance(stmt, A.ExportNamed) and stmt.source is not None:
		return any(is_matching_export_specifier(s, target) for s in stmt.specifiers)
	return False


def is_hijack_candidate(stmt: A.Stmt, target: HijackTarget) -> bool:
	return matches_module(stmt, target) and matches_function(stmt, target)


__all__ = [
	"matches_module",
	"matches_function",
	"is_matching_import_specifier",
	"is_matching_export_specifier",
	"is_hijack_candidate",
]
