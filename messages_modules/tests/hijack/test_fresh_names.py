# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from messages_modules.hijack.names import fresh_name, identifier_base
from messages_modules.parser import parse_module
from messages_modules.scope import ModuleScope


@pytest.mark.parametrize(
	"seed, expected",
	[
		("messages", "messages"),
		("getMessagesFunction", "getMessagesFunction"),
		("get-messages", "getMessages"),
		("_private", "private"),
		("item2", "item"),
		("42", "ref"),
		("", "ref"),
	],
)
def test_identifier_base(seed: str, expected: str) -> None:
	assert identifier_base(seed) == expected


def test_fresh_name_prefixes_underscore_when_free():
	scope = ModuleScope.build(parse_module("const a = 1"))
	assert fresh_name(scope, "messages") == "_messages"


def test_fresh_name_skips_names_used_anywhere():
	source = """
const _messages = 1
function f() { const _messages2 = 2 }
use(_messages3)
"""
	scope = ModuleScope.build(parse_module(source))
	assert fresh_name(scope, "messages") == "_messages4"


def test_fresh_name_reserves_what_it_returns():
	scope = ModuleScope.build(parse_module(""))
	assert [fresh_name(scope, "getMessagesFunction") for _ in range(3)] == [
		"_getMessagesFunction",
		"_getMessagesFunction2",
		"_getMessagesFunction3",
	]
	assert scope.has_name("_getMessagesFunction2")
