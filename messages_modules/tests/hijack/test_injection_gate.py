# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from messages_modules.errors import ConfigurationError
from messages_modules.hijack.messages import MISSING_FILENAME_MESSAGE, Messages
from messages_modules.parser import ast as A
from messages_modules.parser import parse_module
from messages_modules.scope import ModuleScope


def _no_files(path: str):
	raise AssertionError(f"loader should not run: {path}")


def _gate(source: str, tmp_path: Path, loader=_no_files):
	mod = parse_module(source)
	scope = ModuleScope.build(mod)
	return mod, scope, Messages(mod, scope, "Mod.ts", "properties", loader, project_root=tmp_path)


def test_missing_source_path_is_a_configuration_error(tmp_path: Path) -> None:
	mod = parse_module("")
	scope = ModuleScope.build(mod)
	for missing in (None, ""):
		with pytest.raises(ConfigurationError) as excinfo:
			Messages(mod, scope, missing, "properties", _no_files, project_root=tmp_path)
		assert str(excinfo.value) == MISSING_FILENAME_MESSAGE


def test_nothing_injected_without_requests(tmp_path: Path) -> None:
	mod, _scope, messages = _gate("use(x)", tmp_path)
	before = list(mod.body)

	assert messages.finalize() is False
	assert mod.body == before
	assert messages.variable_name is None
	assert messages.declaration is None


def test_variable_name_is_stable_and_avoids_collisions(tmp_path: Path) -> None:
	_mod, _scope, messages = _gate("const _messages = 'taken'", tmp_path)
	first = messages.request_variable()
	second = messages.request_variable()
	assert first == second == "_messages2"
	assert messages.request_count == 2


def test_finalize_prepends_one_declaration(tmp_path: Path) -> None:
	(tmp_path / "Mod.en.properties").write_text("hi = there\n", encoding="utf-8")
	mod, scope, messages = _gate("import { a } from 'm'\nuse(a)", tmp_path, loader=lambda p: {"hi": "there"})
	name = messages.request_variable()
	messages.request_variable()

	assert messages.finalize() is True

	first = mod.body[0]
	assert first is messages.declaration
	assert isinstance(first, A.VarDecl) and first.kind == "const"
	assert first.declarators[0].id.name == name
	literal = first.declarators[0].init
	assert isinstance(literal, A.RawLiteral)
	assert literal.text == (
		'{"isInjected": true, "sourceFilePath": "Mod.ts", "keyValueObjectCollection": {"en": {"hi": "there"}}}'
	)
	assert len([s for s in mod.body if isinstance(s, A.VarDecl)]) == 1
	assert scope.lookup_binding(name).declaration is first
