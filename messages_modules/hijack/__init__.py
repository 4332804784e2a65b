# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The hijack engine.

  matcher    - does a statement import/re-export a configured target?
  names      - scope-unique identifiers
  assembler  - sibling locale discovery and the serialized injected record
  messages   - injection gate (lazy variable, single top-of-file declaration)
  imports    - named-import rebinding
  exports    - named re-export rehoming
  driver     - one pass over a module
"""

from .assembler import assemble_injected_messages, collect_injected_messages
from .driver import HijackPass, HijackResult
from .matcher import is_hijack_candidate, matches_function, matches_module
from .messages import Messages
from .names import fresh_name

__all__ = [
	"assemble_injected_messages",
	"collect_injected_messages",
	"HijackPass",
	"HijackResult",
	"is_hijack_candidate",
	"matches_function",
	"matches_module",
	"Messages",
	"fresh_name",
]
