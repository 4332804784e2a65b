# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-module hijack pass.

One traversal of the module's top-level statements as they were before the
pass started: each statement is checked against every target and dispatched
to the import or re-export hijack. Statements synthesized along the way are
never rescanned. The injection gate is finalized last.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from messages_modules.config import HijackTarget
from messages_modules.parser import ast as A
from messages_modules.scope import ModuleScope

from .assembler import Loader
from .exports import hijack_named_export
from .imports import hijack_named_import
from .matcher import is_hijack_candidate
from .messages import Messages
from .statements import StatementSequence


@dataclass
class HijackResult:
	module: A.Module
	imports_hijacked: int = 0
	exports_rehomed: int = 0
	injected: bool = False
	messages_variable: Optional[str] = None

	@property
	def hijacked(self) -> int:
		return self.imports_hijacked + self.exports_rehomed


class HijackPass:
	def __init__(
		self,
		hijack_targets: Sequence[HijackTarget],
		messages_file_extension: str,
		loader: Loader,
		*,
		project_root: Optional[str | os.PathLike] = None,
	) -> None:
		self.hijack_targets = tuple(hijack_targets)
		self.messages_file_extension = messages_file_extension
		self.loader = loader
		self.project_root = project_root

	def run(self, module: A.Module, source_file_path: Optional[str]) -> HijackResult:
		scope = ModuleScope.build(module)
		messages = Messages(
			module,
			scope,
			source_file_path,
			self.messages_file_extension,
			self.loader,
			project_root=self.project_root,
		)
		result = HijackResult(module=module)
		# Shared across targets so every insertion for a statement follows the earlier ones.
		sequence = StatementSequence(module.body)
		for stmt in list(module.body):
			for target in self.hijack_targets:
				if not is_hijack_candidate(stmt, target):
					continue
				if isinstance(stmt, A.ImportDecl):
					result.imports_hijacked += hijack_named_import(sequence, stmt, target, scope, messages)
				elif isinstance(stmt, A.ExportNamed):
					result.exports_rehomed += hijack_named_export(sequence, stmt, target, scope, messages)
		result.injected = messages.finalize()
		result.messages_variable = messages.variable_name
		return result


__all__ = ["HijackPass", "HijackResult"]
