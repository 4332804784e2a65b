# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from messages_modules.parser import ast as A
from messages_modules.parser import parse_module


def _init(source: str) -> A.Expr:
	mod = parse_module(source)
	(stmt,) = mod.body
	assert isinstance(stmt, A.VarDecl)
	return stmt.declarators[0].init


def test_member_index_call_chain():
	expr = _init("const v = x.y[0](1, 'two')")
	assert isinstance(expr, A.Call)
	assert [a.value for a in expr.args] == [1, "two"]
	assert isinstance(expr.callee, A.Index)
	assert expr.callee.index.value == 0
	assert expr.callee.object == A.Member(object=A.Identifier(name="x"), property="y")


def test_binary_precedence():
	expr = _init("const v = a + b * c === d || e")
	assert isinstance(expr, A.Binary) and expr.op == "||"
	eq = expr.left
	assert isinstance(eq, A.Binary) and eq.op == "==="
	add = eq.left
	assert add.op == "+"
	assert isinstance(add.right, A.Binary) and add.right.op == "*"


def test_conditional_and_unary():
	expr = _init("const v = !ready ? typeof x : -1")
	assert isinstance(expr, A.Conditional)
	assert expr.test == A.Unary(op="!", operand=A.Identifier(name="ready"))
	assert expr.consequent == A.Unary(op="typeof", operand=A.Identifier(name="x"))
	assert isinstance(expr.alternate, A.Unary) and expr.alternate.op == "-"


def test_new_expression_wraps_the_call():
	expr = _init("const d = new Date(ts)")
	assert expr == A.Unary(
		op="new",
		operand=A.Call(callee=A.Identifier(name="Date"), args=[A.Identifier(name="ts")]),
	)
	assert isinstance(_init("const newest = newValue"), A.Identifier)


def test_arrow_functions():
	single = _init("const f = a => a + 1")
	assert isinstance(single, A.Arrow)
	assert [p.name for p in single.params] == ["a"]
	assert isinstance(single.body, A.Binary)

	multi = _init("const g = (a, b) => { return a }")
	assert [p.name for p in multi.params] == ["a", "b"]
	assert isinstance(multi.body, A.Block)
	assert isinstance(multi.body.body[0], A.Return)

	empty = _init("const h = () => ({})")
	assert empty.params == []
	assert empty.body == A.Paren(expr=A.ObjectExpr(properties=[]))


def test_object_literal_properties():
	expr = _init("const o = { a, 'quoted key': 1, b: [c, d], }")
	assert isinstance(expr, A.ObjectExpr)
	shorthand, quoted, keyed = expr.properties
	assert shorthand.shorthand and shorthand.key == "a"
	assert quoted.quoted and quoted.key == "quoted key"
	assert keyed.key == "b"
	assert isinstance(keyed.value, A.ArrayExpr)


def test_string_escapes_are_decoded():
	expr = _init(r"const s = 'it\'s \"fine\"\n'")
	assert expr.value == "it's \"fine\"\n"


def test_assignment_expression_statement():
	mod = parse_module("count += 1")
	(stmt,) = mod.body
	assert isinstance(stmt, A.ExprStmt)
	assert stmt.expr == A.Assign(
		op="+=",
		target=A.Identifier(name="count"),
		value=A.Literal(value=1, raw="1"),
	)


def test_function_if_else_and_blocks():
	source = """
function pick(flag, a, b) {
	var unused
	if (flag) {
		return a
	} else if (b) return b
	else {
		return null
	}
}
"""
	mod = parse_module(source)
	(fn,) = mod.body
	assert isinstance(fn, A.FunctionDecl)
	assert [p.name for p in fn.params] == ["flag", "a", "b"]
	var, branch = fn.body.body
	assert var.kind == "var" and var.declarators[0].init is None
	assert isinstance(branch, A.If)
	assert isinstance(branch.consequent, A.Block)
	nested = branch.alternate
	assert isinstance(nested, A.If)
	assert isinstance(nested.consequent, A.Return)
	assert isinstance(nested.alternate, A.Block)


def test_keywords_after_a_dot_are_property_names():
	expr = _init("const v = Array.from(getMessages('en')).default")
	assert isinstance(expr, A.Member) and expr.property == "default"
	call = expr.object
	assert isinstance(call, A.Call)
	assert call.callee == A.Member(object=A.Identifier(name="Array"), property="from")

	mod = parse_module("x.if\ny.return\n")
	assert [s.expr.property for s in mod.body] == ["if", "return"]


def test_from_and_as_are_ordinary_names():
	mod = parse_module(
		"""
const as = [from]
function from(as) { return as }
const pick = as => as[0]
"""
	)
	decl, fn, arrow = mod.body
	assert decl.declarators[0].id.name == "as"
	assert decl.declarators[0].init == A.ArrayExpr(elements=[A.Identifier(name="from")])
	assert fn.name.name == "from"
	assert [p.name for p in fn.params] == ["as"]
	assert fn.body.body[0].value == A.Identifier(name="as")
	assert [p.name for p in arrow.declarators[0].init.params] == ["as"]
