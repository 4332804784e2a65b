# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark front end for the ES-module subset.

The grammar lives next to this file (`grammar.lark`). Parsing is LALR with a
postlexer that inserts statement terminators and separates statement blocks
from object literals; the resulting parse tree is folded into the dataclass
AST in `messages_modules.parser.ast`.
"""

from __future__ import annotations

import ast as pyast
from pathlib import Path
from typing import Iterator, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from messages_modules.core.span import Span
from messages_modules.errors import ModuleSyntaxError

from .ast import (
	ArrayExpr,
	Arrow,
	Assign,
	Binary,
	Block,
	Call,
	Conditional,
	Declarator,
	ExportAll,
	ExportDecl,
	ExportDefault,
	ExportNamed,
	ExportSpecifier,
	Expr,
	ExprStmt,
	FunctionDecl,
	Identifier,
	If,
	ImportDecl,
	ImportDefaultSpecifier,
	ImportNamespaceSpecifier,
	ImportSpecifier,
	Index,
	Literal,
	Located,
	Member,
	Module,
	ObjectExpr,
	Paren,
	Property,
	Return,
	Stmt,
	Unary,
	VarDecl,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

# `from` and `as` are keywords only inside import/export clauses.
_NAME_TYPES = ("NAME", "FROM", "AS")


class StatementTerminatorInserter:
	"""
	Postlexer turning `;` and statement-ending newlines into TERMINATOR.

	A newline ends a statement when the previous token can end one, we are not
	nested inside parentheses, brackets or an object literal, and the next
	token cannot continue the expression (`.`, binary operators, `else` after a
	block, ...). A `{` in statement position becomes BLOCK_LBRACE, and a
	keyword right after `.` is a property name.

	The single parser instance is shared between threads, so every `process`
	call works on its own `_TerminatorScan`.
	"""

	always_accept = ("NEWLINE", "SEMI")

	def process(self, stream: Iterator[Token]) -> Iterator[Token]:
		return _TerminatorScan().run(stream)


class _TerminatorScan:
	"""Nesting and last-token state for one token stream."""

	TERMINABLE = {
		"NAME",
		"FROM",
		"AS",
		"STRING",
		"NUMBER",
		"TRUE",
		"FALSE",
		"NULL",
		"RPAR",
		"RSQB",
		"RBRACE",
		"RETURN",
	}

	CONTINUATION = {
		"DOT",
		"QMARK",
		"COLON",
		"COMMA",
		"ARROW",
		"EQUAL",
		"PLUS_EQ",
		"MINUS_EQ",
		"OROR",
		"ANDAND",
		"STRICT_EQ",
		"STRICT_NE",
		"EQEQ",
		"NOTEQ",
		"LTE",
		"GTE",
		"LT",
		"GT",
		"PLUS",
		"MINUS",
		"STAR",
		"SLASH",
		"PERCENT",
		"RPAR",
		"RSQB",
		"FROM",
	}

	KEYWORDS = {
		"IMPORT",
		"EXPORT",
		"FROM",
		"AS",
		"DEFAULT",
		"CONST",
		"LET",
		"VAR",
		"FUNCTION",
		"RETURN",
		"IF",
		"ELSE",
		"TRUE",
		"FALSE",
		"NULL",
		"TYPEOF",
		"NEW",
	}

	# Token types after which `{` opens a statement block.
	BLOCK_OPENERS = {None, "TERMINATOR", "BLOCK_LBRACE", "RBRACE", "RPAR", "ELSE", "ARROW"}

	def __init__(self) -> None:
		self.stack: list[str] = []
		self.can_terminate = False
		self.last_type: Optional[str] = None
		self.prev_type: Optional[str] = None

	def run(self, stream: Iterator[Token]) -> Iterator[Token]:
		pending: Optional[Token] = None
		last: Optional[Token] = None
		for token in stream:
			ttype = token.type
			if ttype == "NEWLINE":
				if pending is None:
					pending = token
				continue
			if ttype == "SEMI":
				pending = None
				yield self._terminator(token)
				last = token
				continue
			if ttype in self.KEYWORDS and self.last_type == "DOT":
				# `Array.from`, `value.default`
				token = Token.new_borrow_pos("NAME", token.value, token)
				ttype = "NAME"
			if pending is not None:
				if self._breaks_statement(ttype):
					yield self._terminator(pending)
				pending = None
			if ttype == "RBRACE" and self._top() == "block" and self.can_terminate:
				# `{ return x }`: the last statement of a block needs no `;`.
				yield self._terminator(token)
			if ttype == "LBRACE" and self.last_type in self.BLOCK_OPENERS:
				token = Token.new_borrow_pos("BLOCK_LBRACE", token.value, token)
				ttype = "BLOCK_LBRACE"
			yield token
			last = token
			self._update_stack(ttype)
		if last is not None and self.can_terminate and self._top() in (None, "block"):
			yield self._terminator(last)

	def _terminator(self, borrow: Token) -> Token:
		self.can_terminate = False
		self.prev_type = self.last_type
		self.last_type = "TERMINATOR"
		return Token.new_borrow_pos("TERMINATOR", borrow.value, borrow)

	def _top(self) -> Optional[str]:
		return self.stack[-1] if self.stack else None

	def _update_stack(self, ttype: str) -> None:
		closed: Optional[str] = None
		if ttype == "LPAR":
			self.stack.append("head" if self._opens_head() else "(")
		elif ttype == "LSQB":
			self.stack.append("[")
		elif ttype == "LBRACE":
			self.stack.append("{")
		elif ttype == "BLOCK_LBRACE":
			self.stack.append("block")
		elif ttype in ("RPAR", "RSQB", "RBRACE") and self.stack:
			closed = self.stack.pop()
		self.prev_type = self.last_type
		self.last_type = ttype
		# `if (cond)` and `function f(a)` followed by a newline continue into the body.
		self.can_terminate = ttype in self.TERMINABLE and closed != "head"

	def _opens_head(self) -> bool:
		return self.last_type == "IF" or (self.last_type in _NAME_TYPES and self.prev_type == "FUNCTION")

	def _breaks_statement(self, next_type: str) -> bool:
		if not self.can_terminate:
			return False
		if self._top() not in (None, "block"):
			return False
		if self.last_type == "RETURN":
			return True
		if self.last_type == "FROM" and next_type == "STRING":
			return False
		if next_type in self.CONTINUATION:
			return False
		if next_type == "ELSE":
			return self.last_type != "RBRACE"
		return True


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=StatementTerminatorInserter(),
)


def parse_module(source: str, *, filename: Optional[str] = None) -> Module:
	"""Parse ES-module source text into a `Module`."""
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		line = getattr(exc, "line", None)
		column = getattr(exc, "column", None)
		span = Span(
			file=filename,
			line=line if isinstance(line, int) and line > 0 else None,
			column=column if isinstance(column, int) and column > 0 else None,
		)
		raise ModuleSyntaxError(f"unexpected input: {_describe(exc)}", span) from exc
	builder = _Builder(filename)
	return Module(body=builder.build_body(tree.children), filename=filename, loc=Located(1, 1))


def _describe(exc: UnexpectedInput) -> str:
	token = getattr(exc, "token", None)
	if isinstance(token, Token):
		if token.type == "$END":
			return "end of input"
		return f"{token.type} {token.value!r}"
	char = getattr(exc, "char", None)
	if char is not None:
		return f"character {char!r}"
	return type(exc).__name__


class _Builder:
	"""Fold a lark parse tree into AST dataclasses."""

	def __init__(self, filename: Optional[str]) -> None:
		self._filename = filename

	def _error(self, message: str, node: Tree | Token) -> ModuleSyntaxError:
		return ModuleSyntaxError(message, Span.from_loc(_loc(node), file=self._filename))

	# Statements ---------------------------------------------------------

	def build_body(self, children: list) -> List[Stmt]:
		statements: List[Stmt] = []
		for child in children:
			if not isinstance(child, Tree):
				continue
			stmt = self.build_stmt(child)
			if stmt is not None:
				statements.append(stmt)
		return statements

	def build_stmt(self, tree: Tree) -> Optional[Stmt]:
		kind = _name(tree)
		method = getattr(self, f"_stmt_{kind}", None)
		if method is None:
			raise self._error(f"unsupported statement: {kind}", tree)
		return method(tree)

	def _stmt_empty_stmt(self, tree: Tree) -> None:
		return None

	def _stmt_var_stmt(self, tree: Tree) -> VarDecl:
		return self._var_decl(_trees(tree)[0])

	def _stmt_import_stmt(self, tree: Tree) -> ImportDecl:
		clause = _trees(tree)[0]
		source = _string_value(_token(tree, "STRING"))
		return ImportDecl(specifiers=self._import_clause(clause), source=source, loc=_loc(tree))

	def _stmt_bare_import(self, tree: Tree) -> ImportDecl:
		return ImportDecl(specifiers=[], source=_string_value(_token(tree, "STRING")), loc=_loc(tree))

	def _import_clause(self, clause: Tree) -> list:
		kind = _name(clause)
		names = _tokens(clause, "NAME")
		named = [t for t in _trees(clause) if _name(t) == "named_imports"]
		specifiers: list = []
		if kind in ("default_clause", "default_named_clause", "default_namespace_clause"):
			specifiers.append(ImportDefaultSpecifier(local=_ident(names[0]), loc=_loc(names[0])))
		if kind in ("namespace_clause", "default_namespace_clause"):
			specifiers.append(ImportNamespaceSpecifier(local=_ident(names[-1]), loc=_loc(names[-1])))
		for group in named:
			for spec in _trees(group):
				parts = [t for t in spec.children if isinstance(t, Token)]
				imported, local = parts[0], parts[-1]
				if local.type == "DEFAULT":
					raise self._error("`default` must be imported under another name", spec)
				specifiers.append(ImportSpecifier(imported=imported.value, local=_ident(local), loc=_loc(spec)))
		return specifiers

	def _export_specifiers(self, tree: Tree, *, reexport: bool) -> List[ExportSpecifier]:
		group = next(t for t in _trees(tree) if _name(t) == "named_exports")
		specifiers: List[ExportSpecifier] = []
		for spec in _trees(group):
			local = spec.children[0]
			if local.type == "DEFAULT" and not reexport:
				raise self._error("`default` is not a local name", spec)
			exported = local.value
			alias = [t for t in _trees(spec) if _name(t) == "export_name"]
			if alias:
				exported = alias[0].children[0].value
			specifiers.append(ExportSpecifier(local=_ident(local), exported=exported, loc=_loc(spec)))
		return specifiers

	def _stmt_export_from(self, tree: Tree) -> ExportNamed:
		return ExportNamed(
			specifiers=self._export_specifiers(tree, reexport=True),
			source=_string_value(_token(tree, "STRING")),
			loc=_loc(tree),
		)

	def _stmt_export_local(self, tree: Tree) -> ExportNamed:
		return ExportNamed(specifiers=self._export_specifiers(tree, reexport=False), source=None, loc=_loc(tree))

	def _stmt_export_all(self, tree: Tree) -> ExportAll:
		return ExportAll(source=_string_value(_token(tree, "STRING")), loc=_loc(tree))

	def _stmt_export_var(self, tree: Tree) -> ExportDecl:
		return ExportDecl(declaration=self._var_decl(_trees(tree)[0]), loc=_loc(tree))

	def _stmt_export_function(self, tree: Tree) -> ExportDecl:
		return ExportDecl(declaration=self._stmt_function_decl(_trees(tree)[0]), loc=_loc(tree))

	def _stmt_export_default(self, tree: Tree) -> ExportDefault:
		return ExportDefault(value=self.build_expr(_trees(tree)[0]), loc=_loc(tree))

	def _var_decl(self, tree: Tree) -> VarDecl:
		children = _trees(tree)
		kind = children[0].children[0].value
		declarators: List[Declarator] = []
		for node in children[1:]:
			name_token = node.children[0]
			init_nodes = _trees(node)
			init = self.build_expr(init_nodes[0]) if init_nodes else None
			declarators.append(Declarator(id=_ident(name_token), init=init, loc=_loc(node)))
		return VarDecl(kind=kind, declarators=declarators, loc=_loc(tree))

	def _stmt_function_decl(self, tree: Tree) -> FunctionDecl:
		name_token = _names(tree)[0]
		params: List[Identifier] = []
		body: Optional[Block] = None
		for child in _trees(tree):
			if _name(child) == "params":
				params = [_ident(tok) for tok in _names(child)]
			elif _name(child) == "block":
				body = self._stmt_block(child)
		if body is None:
			raise self._error("function declaration missing body", tree)
		return FunctionDecl(name=_ident(name_token), params=params, body=body, loc=_loc(tree))

	def _stmt_block(self, tree: Tree) -> Block:
		return Block(body=self.build_body(tree.children), loc=_loc(tree))

	def _stmt_return_stmt(self, tree: Tree) -> Return:
		values = _trees(tree)
		value = self.build_expr(values[0]) if values else None
		return Return(value=value, loc=_loc(tree))

	def _stmt_if_stmt(self, tree: Tree) -> If:
		parts = _trees(tree)
		test = self.build_expr(parts[0])
		consequent = self._branch(parts[1])
		alternate = self._branch(parts[2]) if len(parts) > 2 else None
		return If(test=test, consequent=consequent, alternate=alternate, loc=_loc(tree))

	def _branch(self, tree: Tree) -> Stmt:
		stmt = self.build_stmt(tree)
		# `if (x);` has an empty branch.
		return stmt if stmt is not None else Block(body=[], loc=_loc(tree))

	def _stmt_expr_stmt(self, tree: Tree) -> ExprStmt:
		return ExprStmt(expr=self.build_expr(_trees(tree)[0]), loc=_loc(tree))

	# Expressions --------------------------------------------------------

	def build_expr(self, node: Tree | Token) -> Expr:
		if not isinstance(node, Tree):
			raise TypeError(f"Unexpected node type: {type(node)}")
		kind = _name(node)
		method = getattr(self, f"_expr_{kind}", None)
		if method is None:
			raise self._error(f"unsupported expression: {kind}", node)
		return method(node)

	def _expr_var(self, tree: Tree) -> Identifier:
		return _ident(tree.children[0])

	def _expr_string_lit(self, tree: Tree) -> Literal:
		token = tree.children[0]
		return Literal(value=_string_value(token), raw=token.value, loc=_loc(tree))

	def _expr_number_lit(self, tree: Tree) -> Literal:
		raw = tree.children[0].value
		value: int | float = float(raw) if any(c in raw for c in ".eE") else int(raw)
		return Literal(value=value, raw=raw, loc=_loc(tree))

	def _expr_true_lit(self, tree: Tree) -> Literal:
		return Literal(value=True, raw="true", loc=_loc(tree))

	def _expr_false_lit(self, tree: Tree) -> Literal:
		return Literal(value=False, raw="false", loc=_loc(tree))

	def _expr_null_lit(self, tree: Tree) -> Literal:
		return Literal(value=None, raw="null", loc=_loc(tree))

	def _expr_array(self, tree: Tree) -> ArrayExpr:
		return ArrayExpr(elements=[self.build_expr(c) for c in _trees(tree)], loc=_loc(tree))

	def _expr_object(self, tree: Tree) -> ObjectExpr:
		properties: List[Property] = []
		for prop in _trees(tree):
			kind = _name(prop)
			if kind == "shorthand_property":
				name_token = prop.children[0]
				properties.append(
					Property(key=name_token.value, value=_ident(name_token), shorthand=True, loc=_loc(prop))
				)
				continue
			key_token = prop.children[0]
			value = self.build_expr(_trees(prop)[0])
			if kind == "quoted_property":
				properties.append(
					Property(key=_string_value(key_token), value=value, quoted=True, loc=_loc(prop))
				)
			else:
				properties.append(Property(key=key_token.value, value=value, loc=_loc(prop)))
		return ObjectExpr(properties=properties, loc=_loc(tree))

	def _expr_paren(self, tree: Tree) -> Paren:
		inner = _trees(tree)
		if len(inner) != 1:
			raise self._error("parenthesized expression must contain exactly one expression", tree)
		return Paren(expr=self.build_expr(inner[0]), loc=_loc(tree))

	def _expr_member(self, tree: Tree) -> Member:
		obj = self.build_expr(_trees(tree)[0])
		return Member(object=obj, property=_token(tree, "NAME").value, loc=_loc(tree))

	def _expr_index(self, tree: Tree) -> Index:
		obj_node, index_node = _trees(tree)
		return Index(object=self.build_expr(obj_node), index=self.build_expr(index_node), loc=_loc(tree))

	def _expr_call(self, tree: Tree) -> Call:
		parts = _trees(tree)
		callee = self.build_expr(parts[0])
		args: List[Expr] = []
		if len(parts) > 1:
			args = [self.build_expr(a) for a in _trees(parts[1])]
		return Call(callee=callee, args=args, loc=_loc(tree))

	def _expr_unary(self, tree: Tree) -> Unary:
		op_token = tree.children[0]
		return Unary(op=op_token.value, operand=self.build_expr(_trees(tree)[0]), loc=_loc(tree))

	def _expr_binary(self, tree: Tree) -> Binary:
		left_node, op_token, right_node = tree.children
		return Binary(
			op=op_token.value,
			left=self.build_expr(left_node),
			right=self.build_expr(right_node),
			loc=_loc(tree),
		)

	def _expr_ternary(self, tree: Tree) -> Conditional:
		test, consequent, alternate = (self.build_expr(c) for c in _trees(tree))
		return Conditional(test=test, consequent=consequent, alternate=alternate, loc=_loc(tree))

	def _expr_assign(self, tree: Tree) -> Assign:
		target_node, op_node, value_node = _trees(tree)
		target = self.build_expr(target_node)
		if not isinstance(target, (Identifier, Member, Index)):
			raise self._error("invalid assignment target", tree)
		return Assign(op=op_node.children[0].value, target=target, value=self.build_expr(value_node), loc=_loc(tree))

	def _expr_arrow(self, tree: Tree) -> Arrow:
		params_node, body_node = _trees(tree)
		params: List[Identifier] = []
		for child in params_node.children:
			if isinstance(child, Token):
				params.append(_ident(child))
				continue
			# `(a, b) => ...` parses its parameters as a parenthesized list.
			for item in _trees(child):
				if _name(item) != "var":
					raise self._error("arrow function parameters must be plain names", item)
				params.append(_ident(item.children[0]))
		if _name(body_node) == "block":
			body = self._stmt_block(body_node)
		else:
			body = self.build_expr(body_node)
		return Arrow(params=params, body=body, loc=_loc(tree))


# Tree helpers -----------------------------------------------------------


def _trees(node: Tree) -> List[Tree]:
	return [child for child in node.children if isinstance(child, Tree)]


def _tokens(node: Tree, ttype: str) -> List[Token]:
	return [child for child in node.children if isinstance(child, Token) and child.type == ttype]


def _names(node: Tree) -> List[Token]:
	return [child for child in node.children if isinstance(child, Token) and child.type in _NAME_TYPES]


def _token(node: Tree, ttype: str) -> Token:
	found = _tokens(node, ttype)
	if not found:
		raise ValueError(f"{_name(node)} missing {ttype}")
	return found[0]


def _ident(token: Token) -> Identifier:
	return Identifier(name=token.value, loc=_loc(token))


def _string_value(token: Token) -> str:
	# JS and Python agree on the quoting and escapes this subset accepts.
	return pyast.literal_eval(token.value)


def _loc(node: Tree | Token) -> Located:
	if isinstance(node, Token):
		return Located(line=node.line or 0, column=node.column or 0)
	meta = node.meta
	if getattr(meta, "empty", True):
		return Located(line=0, column=0)
	return Located(line=meta.line, column=meta.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_module", "StatementTerminatorInserter"]
