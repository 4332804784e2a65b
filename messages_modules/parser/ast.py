# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST for the ES-module subset compiled by messages-modules.

Nodes are plain mutable dataclasses: the hijack passes rewrite a module in
place (insert/remove top-level statements, rename identifiers), so identity
matters more than value semantics. Equality is still structural (source
positions excluded), which the tests use to check that untouched modules come
out unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


# Synthesized nodes have no source position.
NO_LOC = Located(line=0, column=0)


class Node:
	loc: Located


class Expr(Node):
	pass


class Stmt(Node):
	pass


# --- expressions -------------------------------------------------------------


@dataclass
class Identifier(Expr):
	"""A name in binding or reference position; the unit of renaming."""

	name: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Literal(Expr):
	value: Union[str, int, float, bool, None]
	raw: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class RawLiteral(Expr):
	"""Pre-rendered literal text (e.g. serialized injected messages)."""

	text: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ArrayExpr(Expr):
	elements: List[Expr]
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Property(Node):
	key: str
	value: Expr
	shorthand: bool = False
	quoted: bool = False
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ObjectExpr(Expr):
	properties: List[Property]
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Member(Expr):
	"""`object.property`; the property is a plain name, never a reference."""

	object: Expr
	property: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Index(Expr):
	object: Expr
	index: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Call(Expr):
	callee: Expr
	args: List[Expr]
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Unary(Expr):
	op: str
	operand: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Binary(Expr):
	op: str
	left: Expr
	right: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Conditional(Expr):
	test: Expr
	consequent: Expr
	alternate: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Assign(Expr):
	op: str
	target: Expr
	value: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Paren(Expr):
	"""Explicit grouping as written in the source."""

	expr: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Arrow(Expr):
	params: List[Identifier]
	body: Union[Expr, "Block"]
	loc: Located = field(default=NO_LOC, compare=False)


# --- import / export ---------------------------------------------------------


@dataclass
class ImportSpecifier(Node):
	"""`imported as local` inside `import { ... } from "m"`."""

	imported: str
	local: Identifier
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ImportDefaultSpecifier(Node):
	local: Identifier
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ImportNamespaceSpecifier(Node):
	local: Identifier
	loc: Located = field(default=NO_LOC, compare=False)


AnyImportSpecifier = Union[ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier]


@dataclass
class ImportDecl(Stmt):
	"""
	Import declaration:

	  import { a, b as c } from "m"
	  import d, * as ns from "m"
	  import "m"                 (no specifiers)
	"""

	specifiers: List[AnyImportSpecifier]
	source: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExportSpecifier(Node):
	"""
	`local as exported` inside an export list.

	For `export { ... } from "m"` the local name refers to an export of `m`,
	not to a binding of this module.
	"""

	local: Identifier
	exported: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExportNamed(Stmt):
	"""`export { ... }` (source is None) or `export { ... } from "m"`."""

	specifiers: List[ExportSpecifier]
	source: Optional[str] = None
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExportAll(Stmt):
	source: str
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExportDecl(Stmt):
	declaration: Union["VarDecl", "FunctionDecl"]
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExportDefault(Stmt):
	value: Expr
	loc: Located = field(default=NO_LOC, compare=False)


# --- statements --------------------------------------------------------------


@dataclass
class Declarator(Node):
	id: Identifier
	init: Optional[Expr] = None
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class VarDecl(Stmt):
	kind: str  # "const" | "let" | "var"
	declarators: List[Declarator]
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Block(Stmt):
	body: List[Stmt] = field(default_factory=list)
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class FunctionDecl(Stmt):
	name: Identifier
	params: List[Identifier]
	body: Block
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Return(Stmt):
	value: Optional[Expr] = None
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class If(Stmt):
	test: Expr
	consequent: Stmt
	alternate: Optional[Stmt] = None
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class ExprStmt(Stmt):
	expr: Expr
	loc: Located = field(default=NO_LOC, compare=False)


@dataclass
class Module(Node):
	"""Top-level statement sequence; the unit the hijack passes mutate."""

	body: List[Stmt] = field(default_factory=list)
	filename: Optional[str] = None
	loc: Located = field(default=NO_LOC, compare=False)


__all__ = [
	"Located",
	"NO_LOC",
	"Node",
	"Expr",
	"Stmt",
	"Identifier",
	"Literal",
	"RawLiteral",
	"ArrayExpr",
	"Property",
	"ObjectExpr",
	"Member",
	"Index",
	"Call",
	"Unary",
	"Binary",
	"Conditional",
	"Assign",
	"Paren",
	"Arrow",
	"ImportSpecifier",
	"ImportDefaultSpecifier",
	"ImportNamespaceSpecifier",
	"AnyImportSpecifier",
	"ImportDecl",
	"ExportSpecifier",
	"ExportNamed",
	"ExportAll",
	"ExportDecl",
	"ExportDefault",
	"Declarator",
	"VarDecl",
	"Block",
	"FunctionDecl",
	"Return",
	"If",
	"ExprStmt",
	"Module",
]
