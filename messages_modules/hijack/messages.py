# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Injection gate for one compiled module.

Every hijack asks for the name of the variable holding the file's injected
messages. The variable is only materialized (and the sibling locale files only
read) when at least one hijack asked for it; `finalize` then puts a single
`const <name> = {...};` at the top of the module.
"""

from __future__ import annotations

import os
from typing import Optional

from messages_modules.errors import ConfigurationError
from messages_modules.parser import ast as A
from messages_modules.scope import ModuleScope

from .assembler import Loader, assemble_injected_messages
from .names import fresh_name
from .statements import StatementSequence

MISSING_FILENAME_MESSAGE = "error getting the name of the file during compilation"


class Messages:
	def __init__(
		self,
		module: A.Module,
		scope: ModuleScope,
		source_file_path: Optional[str],
		messages_file_extension: str,
		loader: Loader,
		*,
		project_root: Optional[str | os.PathLike] = None,
	) -> None:
		if not isinstance(source_file_path, str) or not source_file_path:
			raise ConfigurationError(MISSING_FILENAME_MESSAGE)
		self._module = module
		self._scope = scope
		self.source_file_path = source_file_path
		self.messages_file_extension = messages_file_extension
		self._loader = loader
		self._project_root = project_root
		self.request_count = 0
		self._variable_name: Optional[str] = None
		self.declaration: Optional[A.VarDecl] = None

	@property
	def variable_name(self) -> Optional[str]:
		"""The reserved name, or None while nothing has been hijacked."""
		return self._variable_name

	def request_variable(self) -> str:
		self.request_count += 1
		if self._variable_name is None:
			self._variable_name = fresh_name(self._scope, "messages")
		return self._variable_name

	def finalize(self) -> bool:
		"""Inject the messages declaration if any hijack requested it; returns whether it did."""
		if not self.request_count:
			return False
		literal = assemble_injected_messages(
			self.source_file_path,
			self.messages_file_extension,
			self._loader,
			project_root=self._project_root,
		)
		declaration = A.VarDecl(
			kind="const",
			declarators=[
				A.Declarator(id=A.Identifier(name=self._variable_name), init=A.RawLiteral(text=literal))
			],
		)
		StatementSequence(self._module.body).prepend(declaration)
		self._scope.register_declaration(declaration)
		self.declaration = declaration
		return True


__all__ = ["Messages", "MISSING_FILENAME_MESSAGE"]
