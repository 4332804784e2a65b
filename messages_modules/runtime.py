# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Injected-messages record and the runtime accessor bound to it.

Compiled modules carry one `InjectedMessages` literal per source file; the
accessor is applied to it explicitly:

	get_en = bind_messages(injected)
	get_en("en-US")   # -> {"greeting": "Hello"}

Calling the accessor without a valid record means the build pipeline did not
run the hijack pass over the calling module.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import MessagesConfigurationError

KeyValueObject = Dict[str, str]
KeyValueObjectCollection = Dict[str, KeyValueObject]

NOT_CONFIGURED_MESSAGE = "a messages-module plugin must be configured"


@dataclass
class InjectedMessages:
	"""Per-source-file messages for every locale found next to it."""

	source_file_path: str
	key_value_object_collection: KeyValueObjectCollection = field(default_factory=dict)
	is_injected: bool = True

	def to_json(self) -> Dict[str, Any]:
		"""The serialized record, in the field order generated code sees."""
		return {
			"isInjected": self.is_injected,
			"sourceFilePath": self.source_file_path,
			"keyValueObjectCollection": self.key_value_object_collection,
		}

	def dumps(self) -> str:
		return json.dumps(self.to_json(), ensure_ascii=False)

	@classmethod
	def from_mapping(cls, data: Mapping[str, Any]) -> "InjectedMessages":
		if data.get("isInjected") is not True:
			raise MessagesConfigurationError(NOT_CONFIGURED_MESSAGE)
		collection = data.get("keyValueObjectCollection") or {}
		return cls(
			source_file_path=str(data.get("sourceFilePath", "")),
			key_value_object_collection=dict(collection),
		)


def _coerce(injected: Any) -> InjectedMessages:
	if isinstance(injected, InjectedMessages):
		if injected.is_injected is not True:
			raise MessagesConfigurationError(NOT_CONFIGURED_MESSAGE)
		return injected
	if isinstance(injected, Mapping):
		return InjectedMessages.from_mapping(injected)
	raise MessagesConfigurationError(NOT_CONFIGURED_MESSAGE)


def get_messages(injected: Optional[Any], locale: str) -> KeyValueObject:
	"""Messages for `locale` (case-insensitive) or `{}` when the locale has none."""
	record = _coerce(injected)
	messages = record.key_value_object_collection.get(locale.lower())
	return messages if messages else {}


def bind_messages(injected: Any) -> Callable[[str], KeyValueObject]:
	"""Single-argument accessor closed over one file's injected messages."""
	return partial(get_messages, injected)


__all__ = [
	"KeyValueObject",
	"KeyValueObjectCollection",
	"InjectedMessages",
	"get_messages",
	"bind_messages",
	"NOT_CONFIGURED_MESSAGE",
]
