# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lexical scope and binding service for a parsed module.

The hijack passes only need four capabilities from their host:

  - look up a module-level binding by name,
  - enumerate its reference (use) sites,
  - rename a single reference site,
  - register a synthesized declaration so later lookups see it.

`ModuleScope.build` resolves every identifier of a module once; the passes
then mutate the module and keep the scope in sync through `rename_reference`
and `register_declaration`.

Scoping follows ES semantics for the supported subset: `var` and function
declarations hoist to the enclosing function (or module), `let`/`const` are
block-scoped, parameters live in the function scope, and arrow functions open
their own scope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .parser import ast as A


@dataclass(eq=False)
class Binding:
	"""A declared name plus the identifiers that refer to it, in source order."""

	name: str
	kind: str  # "import" | "const" | "let" | "var" | "function" | "param"
	identifier: A.Identifier
	declaration: A.Node
	scope: "Scope"
	references: List[A.Identifier] = field(default_factory=list)


class Scope:
	def __init__(self, parent: Optional["Scope"], kind: str) -> None:
		self.parent = parent
		self.kind = kind  # "module" | "function" | "block"
		self.bindings: Dict[str, Binding] = {}

	def lookup(self, name: str) -> Optional[Binding]:
		scope: Optional[Scope] = self
		while scope is not None:
			binding = scope.bindings.get(name)
			if binding is not None:
				return binding
			scope = scope.parent
		return None

	def function_scope(self) -> "Scope":
		scope = self
		while scope.kind == "block" and scope.parent is not None:
			scope = scope.parent
		return scope


class ModuleScope:
	"""Binding service for one module (see module docstring)."""

	def __init__(self, module: A.Module) -> None:
		self.module = module
		self.root = Scope(None, "module")
		# Every name declared anywhere or referenced as a global.
		self._names: Set[str] = set()
		self._scope_of: Dict[int, Scope] = {}
		self._binding_of: Dict[int, Binding] = {}
		self._unresolved: List[A.Identifier] = []

	@classmethod
	def build(cls, module: A.Module) -> "ModuleScope":
		scope = cls(module)
		_Resolver(scope).resolve_module(module)
		return scope

	# Public service ------------------------------------------------------

	def lookup_binding(self, name: str) -> Optional[Binding]:
		"""Module-level binding for `name`, if any."""
		return self.root.bindings.get(name)

	def binding_of(self, ref: A.Identifier) -> Optional[Binding]:
		return self._binding_of.get(id(ref))

	def has_name(self, name: str) -> bool:
		return name in self._names

	def reserve(self, name: str) -> None:
		"""Mark `name` as taken without declaring it."""
		self._names.add(name)

	def rename_reference(self, ref: A.Identifier, new_name: str) -> None:
		"""Point one use site at `new_name`, moving it to that name's binding."""
		old = self._binding_of.pop(id(ref), None)
		if old is not None:
			old.references = [r for r in old.references if r is not ref]
		else:
			self._unresolved = [r for r in self._unresolved if r is not ref]
		ref.name = new_name
		self._names.add(new_name)
		self._link(ref, self._scope_of.get(id(ref), self.root))

	def register_declaration(self, stmt: A.Stmt) -> None:
		"""Declare the bindings of a synthesized top-level statement and resolve its uses."""
		resolver = _Resolver(self)
		declared = resolver.declare_top_level(stmt, self.root)
		resolver.visit_stmt(stmt, self.root)
		for binding in declared:
			self._adopt_unresolved(binding)

	# Resolver hooks ------------------------------------------------------

	def _declare(self, scope: Scope, ident: A.Identifier, kind: str, declaration: A.Node) -> Optional[Binding]:
		self._names.add(ident.name)
		self._scope_of[id(ident)] = scope
		if ident.name in scope.bindings:
			# Redeclaration (`var` twice, or invalid input): the first one wins.
			return None
		binding = Binding(name=ident.name, kind=kind, identifier=ident, declaration=declaration, scope=scope)
		scope.bindings[ident.name] = binding
		return binding

	def _reference(self, ident: A.Identifier, scope: Scope) -> None:
		self._names.add(ident.name)
		self._scope_of[id(ident)] = scope
		self._link(ident, scope)

	def _link(self, ident: A.Identifier, scope: Scope) -> None:
		binding = scope.lookup(ident.name)
		if binding is None:
			self._unresolved.append(ident)
			return
		binding.references.append(ident)
		self._binding_of[id(ident)] = binding

	def _adopt_unresolved(self, binding: Binding) -> None:
		still: List[A.Identifier] = []
		for ref in self._unresolved:
			scope = self._scope_of.get(id(ref), self.root)
			if ref.name == binding.name and scope.lookup(ref.name) is binding:
				binding.references.append(ref)
				self._binding_of[id(ref)] = binding
			else:
				still.append(ref)
		self._unresolved = still


class _Resolver:
	"""Single walk declaring bindings (with hoisting) and linking references."""

	def __init__(self, scope: ModuleScope) -> None:
		self.ms = scope

	def resolve_module(self, module: A.Module) -> None:
		self._hoist(module.body, self.ms.root)
		for stmt in module.body:
			self.visit_stmt(stmt, self.ms.root)

	def declare_top_level(self, stmt: A.Stmt, scope: Scope) -> List[Binding]:
		before = dict(scope.bindings)
		self._hoist([stmt], scope)
		return [b for name, b in scope.bindings.items() if before.get(name) is not b]

	# Declarations -------------------------------------------------------

	def _hoist(self, body: Iterable[A.Stmt], scope: Scope) -> None:
		for stmt in body:
			self._declare_stmt(stmt, scope)

	def _declare_stmt(self, stmt: A.Stmt, scope: Scope) -> None:
		if isinstance(stmt, A.ImportDecl):
			for spec in stmt.specifiers:
				self.ms._declare(scope, spec.local, "import", stmt)
		elif isinstance(stmt, A.ExportDecl):
			self._declare_stmt(stmt.declaration, scope)
		elif isinstance(stmt, A.VarDecl):
			target = scope.function_scope() if stmt.kind == "var" else scope
			for decl in stmt.declarators:
				self.ms._declare(target, decl.id, stmt.kind, stmt)
		elif isinstance(stmt, A.FunctionDecl):
			self.ms._declare(scope, stmt.name, "function", stmt)
		elif isinstance(stmt, A.If):
			# `var` inside branches still belongs to the function scope.
			self._hoist_vars(stmt.consequent, scope)
			if stmt.alternate is not None:
				self._hoist_vars(stmt.alternate, scope)
		elif isinstance(stmt, A.Block):
			for inner in stmt.body:
				self._hoist_vars(inner, scope)

	def _hoist_vars(self, stmt: A.Stmt, scope: Scope) -> None:
		if isinstance(stmt, A.VarDecl) and stmt.kind == "var":
			self._declare_stmt(stmt, scope)
		elif isinstance(stmt, A.Block):
			for inner in stmt.body:
				self._hoist_vars(inner, scope)
		elif isinstance(stmt, A.If):
			self._hoist_vars(stmt.consequent, scope)
			if stmt.alternate is not None:
				self._hoist_vars(stmt.alternate, scope)

	# References ---------------------------------------------------------

	def visit_stmt(self, stmt: A.Stmt, scope: Scope) -> None:
		if isinstance(stmt, A.ImportDecl):
			for spec in stmt.specifiers:
				self.ms._scope_of[id(spec.local)] = scope
			return
		if isinstance(stmt, A.ExportNamed):
			if stmt.source is None:
				for spec in stmt.specifiers:
					self.ms._reference(spec.local, scope)
			return
		if isinstance(stmt, (A.ExportAll,)):
			return
		if isinstance(stmt, A.ExportDecl):
			self.visit_stmt(stmt.declaration, scope)
			return
		if isinstance(stmt, A.ExportDefault):
			self.visit_expr(stmt.value, scope)
			return
		if isinstance(stmt, A.VarDecl):
			for decl in stmt.declarators:
				if decl.init is not None:
					self.visit_expr(decl.init, scope)
			return
		if isinstance(stmt, A.FunctionDecl):
			self._visit_function(stmt.params, stmt.body, scope)
			return
		if isinstance(stmt, A.Block):
			self._visit_block(stmt, scope)
			return
		if isinstance(stmt, A.Return):
			if stmt.value is not None:
				self.visit_expr(stmt.value, scope)
			return
		if isinstance(stmt, A.If):
			self.visit_expr(stmt.test, scope)
			self._visit_branch(stmt.consequent, scope)
			if stmt.alternate is not None:
				self._visit_branch(stmt.alternate, scope)
			return
		if isinstance(stmt, A.ExprStmt):
			self.visit_expr(stmt.expr, scope)
			return
		raise NotImplementedError(f"scope resolution does not handle stmt {type(stmt).__name__}")

	def _visit_branch(self, stmt: A.Stmt, scope: Scope) -> None:
		if isinstance(stmt, A.Block):
			self._visit_block(stmt, scope)
		else:
			self.visit_stmt(stmt, scope)

	def _visit_block(self, block: A.Block, parent: Scope) -> None:
		inner = Scope(parent, "block")
		for stmt in block.body:
			if isinstance(stmt, A.VarDecl) and stmt.kind == "var":
				continue  # hoisted already
			self._declare_stmt_block(stmt, inner)
		for stmt in block.body:
			self.visit_stmt(stmt, inner)

	def _declare_stmt_block(self, stmt: A.Stmt, scope: Scope) -> None:
		if isinstance(stmt, (A.VarDecl, A.FunctionDecl)):
			self._declare_stmt(stmt, scope)

	def _visit_function(self, params: List[A.Identifier], body: A.Block, parent: Scope) -> None:
		fn_scope = Scope(parent, "function")
		for param in params:
			self.ms._declare(fn_scope, param, "param", param)
		self._hoist(body.body, fn_scope)
		for stmt in body.body:
			self.visit_stmt(stmt, fn_scope)

	def visit_expr(self, expr: A.Expr, scope: Scope) -> None:
		if isinstance(expr, A.Identifier):
			self.ms._reference(expr, scope)
		elif isinstance(expr, (A.Literal, A.RawLiteral)):
			return
		elif isinstance(expr, A.ArrayExpr):
			for element in expr.elements:
				self.visit_expr(element, scope)
		elif isinstance(expr, A.ObjectExpr):
			for prop in expr.properties:
				self.visit_expr(prop.value, scope)
		elif isinstance(expr, A.Member):
			self.visit_expr(expr.object, scope)
		elif isinstance(expr, A.Index):
			self.visit_expr(expr.object, scope)
			self.visit_expr(expr.index, scope)
		elif isinstance(expr, A.Call):
			self.visit_expr(expr.callee, scope)
			for arg in expr.args:
				self.visit_expr(arg, scope)
		elif isinstance(expr, A.Unary):
			self.visit_expr(expr.operand, scope)
		elif isinstance(expr, A.Binary):
			self.visit_expr(expr.left, scope)
			self.visit_expr(expr.right, scope)
		elif isinstance(expr, A.Conditional):
			self.visit_expr(expr.test, scope)
			self.visit_expr(expr.consequent, scope)
			self.visit_expr(expr.alternate, scope)
		elif isinstance(expr, A.Assign):
			self.visit_expr(expr.target, scope)
			self.visit_expr(expr.value, scope)
		elif isinstance(expr, A.Paren):
			self.visit_expr(expr.expr, scope)
		elif isinstance(expr, A.Arrow):
			if isinstance(expr.body, A.Block):
				self._visit_function(expr.params, expr.body, scope)
			else:
				fn_scope = Scope(scope, "function")
				for param in expr.params:
					self.ms._declare(fn_scope, param, "param", param)
				self.visit_expr(expr.body, fn_scope)
		else:
			raise NotImplementedError(f"scope resolution does not handle expr {type(expr).__name__}")


__all__ = ["Binding", "Scope", "ModuleScope"]
