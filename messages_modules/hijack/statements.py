# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Ordered top-level statement sequence with identity-based editing.

AST nodes compare structurally, so two identical statements are equal; every
lookup here goes by identity instead.
"""

from __future__ import annotations

from typing import Dict, List

from messages_modules.parser import ast as A


class StatementSequence:
	def __init__(self, body: List[A.Stmt]) -> None:
		self.body = body
		# id(origin) -> last statement appended after it
		self._tails: Dict[int, A.Stmt] = {}

	def index_of(self, stmt: A.Stmt) -> int:
		for idx, candidate in enumerate(self.body):
			if candidate is stmt:
				return idx
		raise ValueError(f"statement not in sequence: {type(stmt).__name__}")

	def insert_after(self, anchor: A.Stmt, stmt: A.Stmt) -> A.Stmt:
		"""Insert `stmt` right after `anchor`; returns `stmt` so callers can chain anchors."""
		self.body.insert(self.index_of(anchor) + 1, stmt)
		return stmt

	def append_after(self, origin: A.Stmt, stmt: A.Stmt) -> None:
		"""
		Insert `stmt` after `origin` and after everything already appended to it.

		Repeated calls for one origin keep their call order, even when they come
		from different hijack targets.
		"""
		self.insert_after(self._tails.get(id(origin), origin), stmt)
		self._tails[id(origin)] = stmt

	def prepend(self, stmt: A.Stmt) -> None:
		self.body.insert(0, stmt)

	def remove(self, stmt: A.Stmt) -> None:
		del self.body[self.index_of(stmt)]


__all__ = ["StatementSequence"]
