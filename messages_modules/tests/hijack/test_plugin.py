# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from messages_modules.config import PluginConfig
from messages_modules.errors import ConfigurationError
from messages_modules.hijack.messages import MISSING_FILENAME_MESSAGE
from messages_modules.loaders import load_json
from messages_modules.parser import parse_module
from messages_modules.plugin import MessagesModulePlugin, compile_file, compile_source, default_plugin

SOURCE = "import { getMessages } from 'messages-modules'\nexport const m = getMessages('en')\n"


def _write_file(path: Path, text: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")


def _record(output: str) -> dict:
	first = output.splitlines()[0]
	prefix = "const _messages = "
	assert first.startswith(prefix)
	return json.loads(first[len(prefix) : -1])


def test_compile_file_uses_project_relative_path(tmp_path: Path) -> None:
	src = tmp_path / "src" / "Greeting.ts"
	_write_file(src, SOURCE)
	_write_file(tmp_path / "src" / "Greeting.en.properties", "hello = Hello\n")

	output = compile_file(src, default_plugin(tmp_path))

	assert _record(output) == {
		"isInjected": True,
		"sourceFilePath": "src/Greeting.ts",
		"keyValueObjectCollection": {"en": {"hello": "Hello"}},
	}


def test_plugin_from_config_picks_loader_by_extension(tmp_path: Path) -> None:
	src = tmp_path / "Page.ts"
	_write_file(src, SOURCE)
	_write_file(tmp_path / "Page.en.json", '{"hello": "Hello"}')
	_write_file(tmp_path / "Page.en.properties", "hello = ignored\n")

	plugin = MessagesModulePlugin.from_config(PluginConfig(messages_file_extension="json", project_root=tmp_path))

	assert plugin.loader is load_json
	assert _record(compile_file(src, plugin))["keyValueObjectCollection"] == {"en": {"hello": "Hello"}}


def test_transform_reports_counts(tmp_path: Path) -> None:
	plugin = default_plugin(tmp_path)
	module = parse_module(SOURCE)
	result = plugin.transform(module, tmp_path / "Mod.ts")
	assert result.module is module
	assert result.source_file_path == "Mod.ts"
	assert result.hijacked == 1
	assert result.injected is True


def test_missing_filename_is_a_configuration_error(tmp_path: Path) -> None:
	plugin = default_plugin(tmp_path)
	for filename in (None, ""):
		with pytest.raises(ConfigurationError) as excinfo:
			compile_source(SOURCE, filename, plugin)
		assert str(excinfo.value) == MISSING_FILENAME_MESSAGE


def test_one_plugin_serves_many_files(tmp_path: Path) -> None:
	plugin = default_plugin(tmp_path)
	_write_file(tmp_path / "A.ts", SOURCE)
	_write_file(tmp_path / "B.ts", "const _messages = 1\n" + SOURCE)

	out_a = compile_file(tmp_path / "A.ts", plugin)
	out_b = compile_file(tmp_path / "B.ts", plugin)

	assert out_a.startswith("const _messages = ")
	assert out_b.startswith("const _messages2 = ")
	assert '"sourceFilePath": "A.ts"' in out_a
	assert '"sourceFilePath": "B.ts"' in out_b
