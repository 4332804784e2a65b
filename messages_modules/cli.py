# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
messages-modules command line driver.

	python -m messages_modules src/Greeting.ts
	python -m messages_modules -o build src/*.ts --json

Each source file is compiled independently: a failure in one file is reported
as a diagnostic, produces no output for that file, and does not stop the
others. Diagnostics go to stderr as `file:line:col: severity: message`, or to
stdout as one JSON payload with `--json`.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import HijackTarget, PluginConfig, load_config
from .core.diagnostics import Diagnostic
from .core.span import Span
from .errors import ConfigurationError, LoaderError, ModuleSyntaxError
from .parser import parse_module
from .plugin import MessagesModulePlugin
from .printer import print_module


def _build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="messages-modules",
		description="Bind message accessor imports to the locale files next to each module",
	)
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to module source file(s)")
	parser.add_argument("-o", "--output-dir", type=Path, help="Write compiled modules under this directory")
	parser.add_argument("--config", type=Path, help="Path to a messages-modules.json configuration file")
	parser.add_argument(
		"--project-root",
		type=Path,
		default=None,
		help="Project root used for source paths and config lookup (default: current directory)",
	)
	parser.add_argument(
		"--target",
		dest="targets",
		action="append",
		default=None,
		metavar="MODULE:FUNCTION",
		help="Hijack FUNCTION imported from MODULE (repeatable; replaces configured targets)",
	)
	parser.add_argument("--extension", help="Messages file extension (e.g. properties, json)")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	parser.add_argument("--verbose", action="store_true", help="Report per-file hijack notes")
	return parser


def _emit(diagnostics: List[Diagnostic], exit_code: int, as_json: bool) -> None:
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
		return
	for diag in diagnostics:
		print(diag.render(), file=sys.stderr)


def _resolve_config(args: argparse.Namespace, project_root: Path) -> PluginConfig:
	config = load_config(project_root, args.config)
	targets = [HijackTarget.parse(spec) for spec in args.targets] if args.targets else None
	return config.with_overrides(
		hijack_targets=targets,
		messages_file_extension=args.extension.lstrip(".") if args.extension else None,
		project_root=project_root,
	)


def _compile_one(
	source_path: Path,
	plugin: MessagesModulePlugin,
	diagnostics: List[Diagnostic],
	verbose: bool,
) -> Optional[str]:
	file_label = str(source_path)
	try:
		text = source_path.read_text(encoding="utf-8")
	except OSError as exc:
		diagnostics.append(
			Diagnostic(message=f"cannot read source: {exc.strerror or exc}", code="E_IO", phase="io", span=Span(file=file_label))
		)
		return None
	try:
		module = parse_module(text, filename=file_label)
	except ModuleSyntaxError as exc:
		diagnostics.append(Diagnostic(message=str(exc), code="E_SYNTAX", phase="parser", span=exc.span))
		return None
	try:
		result = plugin.transform(module, source_path)
	except ConfigurationError as exc:
		diagnostics.append(Diagnostic(message=str(exc), code="E_CONFIG", phase="transform", span=Span(file=file_label)))
		return None
	except (LoaderError, OSError, ValueError) as exc:
		# LoaderError plus OS and decoding failures abort this file only.
		diagnostics.append(
			Diagnostic(
				message=f"loading messages failed: {exc}",
				code="E_LOADER",
				phase="loader",
				span=Span(file=file_label),
				notes=[type(exc).__name__],
			)
		)
		return None
	if verbose:
		state = "injected messages" if result.injected else "no hijack"
		diagnostics.append(
			Diagnostic(
				message=f"hijacked {result.hijacked} binding(s); {state}",
				phase="transform",
				severity="note",
				span=Span(file=file_label),
			)
		)
	return print_module(result.module)


def main(argv: list[str] | None = None) -> int:
	parser = _build_arg_parser()
	args = parser.parse_args(argv)
	project_root = (args.project_root or Path.cwd()).resolve()

	try:
		config = _resolve_config(args, project_root)
		plugin = MessagesModulePlugin.from_config(config)
	except ConfigurationError as exc:
		_emit([Diagnostic(message=str(exc), code="E_CONFIG", phase="config")], 2, args.json)
		return 2

	sources: List[Path] = [p if p.is_absolute() else (Path.cwd() / p) for p in args.source]
	if args.output_dir is None and len(sources) > 1:
		_emit(
			[Diagnostic(message="multiple sources require --output-dir", code="E_CONFIG", phase="config")],
			2,
			args.json,
		)
		return 2

	diagnostics: List[Diagnostic] = []
	failed = False
	for source_path in sources:
		output = _compile_one(source_path, plugin, diagnostics, args.verbose)
		if output is None:
			failed = True
			continue
		if args.output_dir is None:
			sys.stdout.write(output)
			continue
		out_path = args.output_dir / plugin.source_file_path(source_path).lstrip("/")
		out_path.parent.mkdir(parents=True, exist_ok=True)
		out_path.write_text(output, encoding="utf-8")

	exit_code = 1 if failed else 0
	if args.json or diagnostics:
		if args.json and args.output_dir is None and not failed:
			# stdout already carries the compiled module; keep JSON on stderr.
			print(
				json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}),
				file=sys.stderr,
			)
		else:
			_emit(diagnostics, exit_code, args.json)
	return exit_code


__all__ = ["main"]
