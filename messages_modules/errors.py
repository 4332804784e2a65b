# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Exception taxonomy.

Compile-time failures (configuration, syntax, loader format) abort the current
file and propagate to the caller unchanged; the CLI is the only place that
turns them into diagnostics. `MessagesConfigurationError` is raised by the
runtime helper when generated code calls it without injected messages.
"""

from __future__ import annotations

from typing import Optional

from .core.span import Span


class MessagesModulesError(Exception):
	"""Base class for all errors raised by this package."""


class ConfigurationError(MessagesModulesError):
	"""The engine cannot run for a file (missing file path, bad config, unknown extension)."""


class ModuleSyntaxError(MessagesModulesError, ValueError):
	"""Source text could not be parsed."""

	def __init__(self, message: str, span: Optional[Span] = None) -> None:
		super().__init__(message)
		self.span = span if span is not None else Span()


class LoaderError(MessagesModulesError):
	"""A messages file was readable but its content is not a key/value object."""

	def __init__(self, message: str, path: Optional[str] = None) -> None:
		super().__init__(message)
		self.path = path


class MessagesConfigurationError(MessagesModulesError):
	"""Runtime helper invoked without bound injected messages."""


__all__ = [
	"MessagesModulesError",
	"ConfigurationError",
	"ModuleSyntaxError",
	"LoaderError",
	"MessagesConfigurationError",
]
