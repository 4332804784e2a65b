# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from messages_modules.parser import ast as A
from messages_modules.parser import parse_module
from messages_modules.scope import ModuleScope


SHADOWING_SOURCE = """
import { getMessages } from 'messages-modules'
const a = getMessages
function f(getMessages) { return getMessages }
const g = () => getMessages('x')
{
	let getMessages = 1
	getMessages
}
"""


def test_module_binding_references_skip_shadowed_uses():
	mod = parse_module(SHADOWING_SOURCE)
	scope = ModuleScope.build(mod)
	binding = scope.lookup_binding("getMessages")

	assert binding is not None
	assert binding.kind == "import"
	assert binding.declaration is mod.body[0]
	assert [ref.loc.line for ref in binding.references] == [3, 5]
	assert binding.references[0] is mod.body[1].declarators[0].init


def test_lookup_binding_is_module_level_only():
	mod = parse_module("function f(inner) { const local = inner }")
	scope = ModuleScope.build(mod)
	assert scope.lookup_binding("f") is not None
	assert scope.lookup_binding("inner") is None
	assert scope.lookup_binding("local") is None
	# Nested names still count as taken.
	assert scope.has_name("inner")
	assert scope.has_name("local")


def test_var_hoists_out_of_blocks_and_let_does_not():
	mod = parse_module("if (x) {\n\tvar hoisted = 1\n\tlet scoped = 2\n}\nhoisted\nscoped\n")
	scope = ModuleScope.build(mod)
	hoisted = scope.lookup_binding("hoisted")
	assert hoisted is not None and hoisted.kind == "var"
	assert len(hoisted.references) == 1
	assert scope.lookup_binding("scoped") is None


def test_globals_are_reserved_names():
	mod = parse_module("console.dir(window)")
	scope = ModuleScope.build(mod)
	assert scope.has_name("console")
	assert scope.has_name("window")
	assert not scope.has_name("dir")


def test_rename_reference_moves_use_to_new_binding():
	mod = parse_module("import { a } from 'm'\nconst b = 1\nuse(a)\n")
	scope = ModuleScope.build(mod)
	a_binding = scope.lookup_binding("a")
	b_binding = scope.lookup_binding("b")
	(ref,) = a_binding.references

	scope.rename_reference(ref, "b")

	assert ref.name == "b"
	assert a_binding.references == []
	assert b_binding.references[0] is ref
	assert scope.binding_of(ref) is b_binding


def test_register_declaration_adopts_earlier_renamed_references():
	mod = parse_module("import { a } from 'm'\nuse(a)\n")
	scope = ModuleScope.build(mod)
	(ref,) = scope.lookup_binding("a").references

	scope.rename_reference(ref, "_fresh")
	assert scope.binding_of(ref) is None

	decl = A.VarDecl(
		kind="const",
		declarators=[A.Declarator(id=A.Identifier(name="_fresh"), init=A.Identifier(name="a"))],
	)
	mod.body.insert(1, decl)
	scope.register_declaration(decl)

	fresh = scope.lookup_binding("_fresh")
	assert fresh is not None and fresh.declaration is decl
	assert fresh.references == [ref] and fresh.references[0] is ref
	# The initializer of the synthesized declaration is a use of `a`.
	assert scope.lookup_binding("a").references[0] is decl.declarators[0].init


def test_local_export_specifiers_are_references_but_reexports_are_not():
	mod = parse_module("const a = 1\nexport { a }\nexport { b } from 'm'\n")
	scope = ModuleScope.build(mod)
	assert len(scope.lookup_binding("a").references) == 1
	assert not scope.has_name("b")
