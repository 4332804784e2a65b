# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json

import pytest

from messages_modules.errors import MessagesConfigurationError
from messages_modules.runtime import NOT_CONFIGURED_MESSAGE, InjectedMessages, bind_messages, get_messages

INJECTED = InjectedMessages(
	source_file_path="src/Greeting.ts",
	key_value_object_collection={
		"en-us": {"greeting": "Hello"},
		"fr-ca": {"greeting": "Bonjour"},
		"de": {},
	},
)


def test_lookup_is_case_insensitive():
	assert get_messages(INJECTED, "en-US") == {"greeting": "Hello"}
	assert get_messages(INJECTED, "FR-CA") == {"greeting": "Bonjour"}


def test_unknown_or_empty_locale_returns_empty_object():
	assert get_messages(INJECTED, "ja") == {}
	assert get_messages(INJECTED, "de") == {}


def test_missing_or_invalid_injection_raises():
	for bad in (None, {}, {"isInjected": False}, "nope", InjectedMessages("x", {}, is_injected=False)):
		with pytest.raises(MessagesConfigurationError) as excinfo:
			get_messages(bad, "en")
		assert str(excinfo.value) == NOT_CONFIGURED_MESSAGE


def test_serialized_record_is_accepted():
	data = json.loads(INJECTED.dumps())
	assert get_messages(data, "en-us") == {"greeting": "Hello"}


def test_bound_accessor_takes_only_the_locale():
	get = bind_messages(INJECTED)
	assert get("en-US") == {"greeting": "Hello"}
	assert get("xx") == {}


def test_bound_accessors_are_independent():
	other = InjectedMessages("src/Other.ts", {"en-us": {"greeting": "Hi"}})
	get_a = bind_messages(INJECTED)
	get_b = bind_messages(other)
	assert get_a("en-us") != get_b("en-us")


def test_record_serialization_field_order():
	assert list(INJECTED.to_json()) == ["isInjected", "sourceFilePath", "keyValueObjectCollection"]
	assert INJECTED.dumps().startswith('{"isInjected": true, "sourceFilePath": "src/Greeting.ts"')
