# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from messages_modules.errors import ModuleSyntaxError
from messages_modules.parser import ast as A
from messages_modules.parser import parse_module


def test_newlines_and_semicolons_end_statements():
	mod = parse_module("a()\nb(); c()\n\n;d()")
	assert [s.expr.callee.name for s in mod.body] == ["a", "b", "c", "d"]


def test_operator_and_dot_lines_continue_the_statement():
	source = """
const total = a
	+ b
foo
	.bar()
"""
	mod = parse_module(source)
	assert len(mod.body) == 2
	decl, call = mod.body
	assert isinstance(decl.declarators[0].init, A.Binary)
	assert call.expr.callee == A.Member(object=A.Identifier(name="foo"), property="bar")


def test_newlines_inside_brackets_do_not_terminate():
	source = """
const list = [
	one,
	two
]
call(
	list,
	{
		key: value
	}
)
"""
	mod = parse_module(source)
	assert len(mod.body) == 2
	assert len(mod.body[0].declarators[0].init.elements) == 2
	assert len(mod.body[1].expr.args) == 2


def test_block_after_call_on_next_line_is_a_statement():
	mod = parse_module("run()\n{\n\tlet x = 1\n}\n")
	call, block = mod.body
	assert isinstance(call, A.ExprStmt)
	assert isinstance(block, A.Block)
	assert block.body[0].kind == "let"


def test_function_head_continues_onto_next_line():
	mod = parse_module("function f(a)\n{\n\treturn a\n}\n")
	(fn,) = mod.body
	assert isinstance(fn, A.FunctionDecl)
	assert isinstance(fn.body.body[0], A.Return)


def test_bare_return_before_newline():
	mod = parse_module("function f() {\n\treturn\n\tvalue\n}")
	ret, stray = mod.body[0].body.body
	assert ret == A.Return(value=None)
	assert isinstance(stray, A.ExprStmt)


def test_comments_are_ignored():
	mod = parse_module("// leading\nimport { a } from 'm' /* trailing */\n/* block\ncomment */ a()\n")
	assert [type(s) for s in mod.body] == [A.ImportDecl, A.ExprStmt]


def test_syntax_error_reports_location():
	with pytest.raises(ModuleSyntaxError) as excinfo:
		parse_module("import { a } from 'm'\nconst = 1\n", filename="broken.ts")
	span = excinfo.value.span
	assert span.file == "broken.ts"
	assert span.line == 2


def test_unexpected_character_is_a_syntax_error():
	with pytest.raises(ModuleSyntaxError) as excinfo:
		parse_module("const a = #b")
	assert excinfo.value.span.line == 1
	assert "character" in str(excinfo.value)
