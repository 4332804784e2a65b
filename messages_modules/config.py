# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Hijack configuration.

A project may carry a `messages-modules.json` next to its sources:

  {
    "hijackTargets": [{"function": "getMessages", "module": "messages-modules"}],
    "messagesFileExtension": "properties"
  }

Both keys are optional; missing keys fall back to the defaults below (the
bundled `getMessages` target and `.properties` files).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .errors import ConfigurationError

CONFIG_FILENAME = "messages-modules.json"


@dataclass(frozen=True)
class HijackTarget:
	"""One importable binding to intercept: `function` exported by `module`."""

	function: str
	module: str

	@classmethod
	def parse(cls, spec: str) -> "HijackTarget":
		"""Parse the CLI form `MODULE:FUNCTION` (the module may itself contain `:`)."""
		module, sep, function = spec.rpartition(":")
		if not sep or not module or not function:
			raise ConfigurationError(f"invalid hijack target {spec!r} (expected MODULE:FUNCTION)")
		return cls(function=function, module=module)


DEFAULT_HIJACK_TARGETS: Tuple[HijackTarget, ...] = (
	HijackTarget(function="getMessages", module="messages-modules"),
)
DEFAULT_MESSAGES_FILE_EXTENSION = "properties"


@dataclass(frozen=True)
class PluginConfig:
	hijack_targets: Tuple[HijackTarget, ...] = DEFAULT_HIJACK_TARGETS
	messages_file_extension: str = DEFAULT_MESSAGES_FILE_EXTENSION
	project_root: Path = field(default_factory=lambda: Path("."))

	def with_overrides(
		self,
		*,
		hijack_targets: Optional[Sequence[HijackTarget]] = None,
		messages_file_extension: Optional[str] = None,
		project_root: Optional[Path] = None,
	) -> "PluginConfig":
		return PluginConfig(
			hijack_targets=tuple(hijack_targets) if hijack_targets else self.hijack_targets,
			messages_file_extension=messages_file_extension or self.messages_file_extension,
			project_root=project_root if project_root is not None else self.project_root,
		)


def config_from_mapping(data: Any, *, project_root: Path, origin: str = "<config>") -> PluginConfig:
	"""Validate a decoded config object."""
	if not isinstance(data, Mapping):
		raise ConfigurationError(f"{origin}: configuration must be a JSON object")
	targets: List[HijackTarget] = list(DEFAULT_HIJACK_TARGETS)
	if "hijackTargets" in data:
		raw_targets = data["hijackTargets"]
		if not isinstance(raw_targets, list) or not raw_targets:
			raise ConfigurationError(f"{origin}: 'hijackTargets' must be a non-empty list")
		targets = []
		for idx, entry in enumerate(raw_targets):
			if not isinstance(entry, Mapping):
				raise ConfigurationError(f"{origin}: hijackTargets[{idx}] must be an object")
			function = entry.get("function")
			module = entry.get("module")
			if not isinstance(function, str) or not function:
				raise ConfigurationError(f"{origin}: hijackTargets[{idx}].function must be a non-empty string")
			if not isinstance(module, str) or not module:
				raise ConfigurationError(f"{origin}: hijackTargets[{idx}].module must be a non-empty string")
			targets.append(HijackTarget(function=function, module=module))
	extension = data.get("messagesFileExtension", DEFAULT_MESSAGES_FILE_EXTENSION)
	if not isinstance(extension, str) or not extension:
		raise ConfigurationError(f"{origin}: 'messagesFileExtension' must be a non-empty string")
	return PluginConfig(
		hijack_targets=tuple(targets),
		messages_file_extension=extension.lstrip("."),
		project_root=project_root,
	)


def load_config(project_root: Path, config_path: Optional[Path] = None) -> PluginConfig:
	"""
	Load configuration for a project.

	An explicit `config_path` must exist. Without one, `<project_root>/messages-modules.json`
	is used when present, and defaults otherwise.
	"""
	path = config_path
	if path is None:
		candidate = project_root / CONFIG_FILENAME
		if not candidate.exists():
			return PluginConfig(project_root=project_root)
		path = candidate
	elif not path.exists():
		raise ConfigurationError(f"config file not found: {path}")
	try:
		data = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as exc:
		raise ConfigurationError(f"{path}: invalid JSON: {exc.msg} (line {exc.lineno})") from exc
	return config_from_mapping(data, project_root=project_root, origin=str(path))


__all__ = [
	"CONFIG_FILENAME",
	"HijackTarget",
	"PluginConfig",
	"DEFAULT_HIJACK_TARGETS",
	"DEFAULT_MESSAGES_FILE_EXTENSION",
	"config_from_mapping",
	"load_config",
]
