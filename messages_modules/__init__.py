# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
messages-modules: bind message accessor imports to per-file locale data at compile time.

Layout:
  parser:   ES-module subset front end (lark grammar + AST)
  scope:    binding/reference service over a parsed module
  hijack:   the rewriting engine (matching, rebinding, rehoming, injection)
  printer:  AST back to source text
  loaders:  messages file readers (.properties, .json)
  runtime:  the accessor compiled modules call
  plugin:   configured engine + compile helpers
  cli:      command line driver
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
