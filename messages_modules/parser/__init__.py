# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""ES-module subset front end: grammar, parse tree folding and AST."""

from . import ast
from .parser import parse_module

__all__ = ["ast", "parse_module"]
