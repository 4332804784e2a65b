# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render a (possibly rewritten) module back to source text.

Output is deterministic: one statement per line, `;`-terminated, two-space
indentation inside blocks, double-quoted strings. Grouping is reproduced only
where the source had explicit parentheses (`Paren`).
"""

from __future__ import annotations

import json
from typing import List

from .parser import ast as A

_INDENT = "  "


def print_module(module: A.Module) -> str:
	lines: List[str] = []
	for stmt in module.body:
		lines.extend(format_stmt(stmt))
	return "\n".join(lines) + ("\n" if lines else "")


def format_stmt(stmt: A.Stmt, depth: int = 0) -> List[str]:
	pad = _INDENT * depth
	if isinstance(stmt, A.ImportDecl):
		return [pad + _format_import(stmt)]
	if isinstance(stmt, A.ExportNamed):
		specs = ", ".join(_format_export_specifier(s) for s in stmt.specifiers)
		braces = f"{{ {specs} }}" if specs else "{}"
		if stmt.source is None:
			return [f"{pad}export {braces};"]
		return [f"{pad}export {braces} from {_quote(stmt.source)};"]
	if isinstance(stmt, A.ExportAll):
		return [f"{pad}export * from {_quote(stmt.source)};"]
	if isinstance(stmt, A.ExportDecl):
		inner = format_stmt(stmt.declaration, depth)
		inner[0] = pad + "export " + inner[0][len(pad):]
		return inner
	if isinstance(stmt, A.ExportDefault):
		return _prefix_lines(pad + "export default ", format_expr(stmt.value, depth), ";")
	if isinstance(stmt, A.VarDecl):
		parts = []
		for decl in stmt.declarators:
			if decl.init is None:
				parts.append(decl.id.name)
			else:
				parts.append(f"{decl.id.name} = {format_expr(decl.init, depth)}")
		return (f"{pad}{stmt.kind} " + ", ".join(parts) + ";").split("\n")
	if isinstance(stmt, A.FunctionDecl):
		params = ", ".join(p.name for p in stmt.params)
		return _prefix_lines(f"{pad}function {stmt.name.name}({params}) ", _format_block(stmt.body, depth), "")
	if isinstance(stmt, A.Block):
		return _prefix_lines(pad, _format_block(stmt, depth), "")
	if isinstance(stmt, A.Return):
		if stmt.value is None:
			return [f"{pad}return;"]
		return _prefix_lines(pad + "return ", format_expr(stmt.value, depth), ";")
	if isinstance(stmt, A.If):
		text = f"{pad}if ({format_expr(stmt.test, depth)}) {_format_branch(stmt.consequent, depth)}"
		if stmt.alternate is not None:
			text += f" else {_format_branch(stmt.alternate, depth)}"
		return text.split("\n")
	if isinstance(stmt, A.ExprStmt):
		return _prefix_lines(pad, format_expr(stmt.expr, depth), ";")
	raise NotImplementedError(f"printer does not handle stmt {type(stmt).__name__}")


def _format_branch(stmt: A.Stmt, depth: int) -> str:
	if isinstance(stmt, A.Block):
		return _format_block(stmt, depth)
	return "\n".join(format_stmt(stmt, depth)).lstrip(" ")


def _format_block(block: A.Block, depth: int) -> str:
	if not block.body:
		return "{}"
	inner: List[str] = []
	for stmt in block.body:
		inner.extend(format_stmt(stmt, depth + 1))
	return "{\n" + "\n".join(inner) + "\n" + _INDENT * depth + "}"


def _prefix_lines(prefix: str, text: str, suffix: str) -> List[str]:
	return (prefix + text + suffix).split("\n")


def _format_import(stmt: A.ImportDecl) -> str:
	source = _quote(stmt.source)
	if not stmt.specifiers:
		return f"import {source};"
	clauses: List[str] = []
	named: List[str] = []
	for spec in stmt.specifiers:
		if isinstance(spec, A.ImportDefaultSpecifier):
			clauses.append(spec.local.name)
		elif isinstance(spec, A.ImportNamespaceSpecifier):
			clauses.append(f"* as {spec.local.name}")
		elif spec.imported == spec.local.name:
			named.append(spec.imported)
		else:
			named.append(f"{spec.imported} as {spec.local.name}")
	if named:
		clauses.append("{ " + ", ".join(named) + " }")
	return f"import {', '.join(clauses)} from {source};"


def _format_export_specifier(spec: A.ExportSpecifier) -> str:
	if spec.local.name == spec.exported:
		return spec.exported
	return f"{spec.local.name} as {spec.exported}"


def format_expr(expr: A.Expr, depth: int = 0) -> str:
	if isinstance(expr, A.Identifier):
		return expr.name
	if isinstance(expr, A.Literal):
		if isinstance(expr.value, str):
			return _quote(expr.value)
		return expr.raw
	if isinstance(expr, A.RawLiteral):
		return expr.text
	if isinstance(expr, A.ArrayExpr):
		return "[" + ", ".join(format_expr(e, depth) for e in expr.elements) + "]"
	if isinstance(expr, A.ObjectExpr):
		if not expr.properties:
			return "{}"
		return "{ " + ", ".join(_format_property(p, depth) for p in expr.properties) + " }"
	if isinstance(expr, A.Member):
		return f"{format_expr(expr.object, depth)}.{expr.property}"
	if isinstance(expr, A.Index):
		return f"{format_expr(expr.object, depth)}[{format_expr(expr.index, depth)}]"
	if isinstance(expr, A.Call):
		args = ", ".join(format_expr(a, depth) for a in expr.args)
		return f"{format_expr(expr.callee, depth)}({args})"
	if isinstance(expr, A.Unary):
		sep = " " if expr.op.isalpha() else ""
		return f"{expr.op}{sep}{format_expr(expr.operand, depth)}"
	if isinstance(expr, A.Binary):
		return f"{format_expr(expr.left, depth)} {expr.op} {format_expr(expr.right, depth)}"
	if isinstance(expr, A.Conditional):
		return (
			f"{format_expr(expr.test, depth)} ? {format_expr(expr.consequent, depth)}"
			f" : {format_expr(expr.alternate, depth)}"
		)
	if isinstance(expr, A.Assign):
		return f"{format_expr(expr.target, depth)} {expr.op} {format_expr(expr.value, depth)}"
	if isinstance(expr, A.Paren):
		return f"({format_expr(expr.expr, depth)})"
	if isinstance(expr, A.Arrow):
		params = ", ".join(p.name for p in expr.params)
		if isinstance(expr.body, A.Block):
			body = _format_block(expr.body, depth)
		else:
			body = format_expr(expr.body, depth)
		return f"({params}) => {body}"
	raise NotImplementedError(f"printer does not handle expr {type(expr).__name__}")


def _format_property(prop: A.Property, depth: int) -> str:
	value = prop.value
	if isinstance(value, A.Identifier) and value.name == prop.key and not prop.quoted:
		return prop.key
	key = _quote(prop.key) if prop.quoted else prop.key
	return f"{key}: {format_expr(value, depth)}"


def _quote(value: str) -> str:
	return json.dumps(value, ensure_ascii=False)


__all__ = ["print_module", "format_stmt", "format_expr"]
