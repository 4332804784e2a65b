# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Configured messages-modules compiler.

	plugin = MessagesModulePlugin(targets, "properties", load_properties, project_root=root)
	output = compile_file(root / "src/Greeting.ts", plugin)

`MessagesModulePlugin` owns no per-file state: every `transform` call builds a
fresh scope and injection gate, so one plugin can serve many files (also from
several threads).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_HIJACK_TARGETS, DEFAULT_MESSAGES_FILE_EXTENSION, HijackTarget, PluginConfig
from .errors import ConfigurationError
from .hijack import HijackPass, HijackResult
from .hijack.assembler import Loader
from .hijack.messages import MISSING_FILENAME_MESSAGE
from .loaders import load_properties, loader_for_extension
from .parser import ast as A
from .parser import parse_module
from .paths import project_relative_path
from .printer import print_module


@dataclass
class TransformResult:
	module: A.Module
	source_file_path: str
	hijacked: int
	injected: bool


class MessagesModulePlugin:
	def __init__(
		self,
		hijack_targets: Sequence[HijackTarget],
		messages_file_extension: str,
		loader: Loader,
		*,
		project_root: Path,
	) -> None:
		self.hijack_targets = tuple(hijack_targets)
		self.messages_file_extension = messages_file_extension
		self.loader = loader
		self.project_root = Path(project_root)
		self._pass = HijackPass(
			self.hijack_targets,
			messages_file_extension,
			loader,
			project_root=self.project_root,
		)

	@classmethod
	def from_config(cls, config: PluginConfig, loader: Optional[Loader] = None) -> "MessagesModulePlugin":
		return cls(
			config.hijack_targets,
			config.messages_file_extension,
			loader or loader_for_extension(config.messages_file_extension),
			project_root=config.project_root,
		)

	def source_file_path(self, filename: Optional[str | Path]) -> str:
		if filename is None or str(filename) == "":
			raise ConfigurationError(MISSING_FILENAME_MESSAGE)
		return project_relative_path(filename, self.project_root)

	def transform(self, module: A.Module, filename: Optional[str | Path]) -> TransformResult:
		source_file_path = self.source_file_path(filename)
		result: HijackResult = self._pass.run(module, source_file_path)
		return TransformResult(
			module=result.module,
			source_file_path=source_file_path,
			hijacked=result.hijacked,
			injected=result.injected,
		)


def default_plugin(project_root: Path) -> MessagesModulePlugin:
	"""The bundled setup: `getMessages` from `messages-modules`, `.properties` files."""
	return MessagesModulePlugin(
		DEFAULT_HIJACK_TARGETS,
		DEFAULT_MESSAGES_FILE_EXTENSION,
		load_properties,
		project_root=project_root,
	)


def compile_source(source: str, filename: Optional[str | Path], plugin: MessagesModulePlugin) -> str:
	module = parse_module(source, filename=str(filename) if filename is not None else None)
	plugin.transform(module, filename)
	return print_module(module)


def compile_file(path: Path, plugin: MessagesModulePlugin) -> str:
	return compile_source(Path(path).read_text(encoding="utf-8"), path, plugin)


__all__ = [
	"MessagesModulePlugin",
	"TransformResult",
	"default_plugin",
	"compile_source",
	"compile_file",
]
