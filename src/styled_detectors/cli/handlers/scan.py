"""
Scan Command Handler.

Loads JavaScript sources (parsed with tree-sitter) or ESTree JSON files (as
emitted by ``babel-parser --json``), resolves the styled-components bindings of
each file and reports every classified tag.
All files of one invocation share a single ``DetectorState``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from styled_detectors.analysis.scanner import resolve_bindings, scan_tags
from styled_detectors.analysis.state import DetectorState, FileContext
from styled_detectors.config import DetectorConfig
from styled_detectors.tree.estree import TreeLoadError, load_estree_file
from styled_detectors.tree.nodes import Program
from styled_detectors.tree.source import SOURCE_SUFFIXES, load_source_file
from styled_detectors.utils.console import console, log_error, log_info, log_success


_SCANNED_SUFFIXES = SOURCE_SUFFIXES | {".json"}


def _load(path: Path) -> Program:
  if path.suffix.lower() in SOURCE_SUFFIXES:
    return load_source_file(path)
  return load_estree_file(path)


def _scan_file(path: Path, config: DetectorConfig, state: DetectorState) -> Dict[str, Any]:
  program = _load(path)
  ctx = FileContext.from_config(str(path), program, config, state=state)
  bindings = resolve_bindings(ctx)
  matches = scan_tags(ctx)
  return {
    "file": str(path),
    "bindings": {kind.export_name: local for kind, local in bindings.items()},
    "tags": [
      {
        "kind": m.kind.name.lower(),
        "expression": m.expression,
        "line": m.line,
      }
      for m in matches
    ],
  }


def _render_report(report: Dict[str, Any]) -> None:
  bound = {k: v for k, v in report["bindings"].items() if v is not None}

  console.print(f"[path]{report['file']}[/path]")
  if bound:
    table = Table(title="Bindings")
    table.add_column("Export", style="cyan")
    table.add_column("Local Name", style="code")
    for export, local in bound.items():
      table.add_row(export, local)
    console.print(table)
  else:
    console.print("  No styled-components bindings.")

  if report["tags"]:
    table = Table(title="Tags")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Expression", style="green")
    for tag in report["tags"]:
      table.add_row(str(tag["line"] or "?"), tag["kind"], tag["expression"])
    console.print(table)


def handle_scan(
  path: Path,
  import_paths: Optional[List[str]] = None,
  styled_required: Optional[str] = None,
  json_mode: bool = False,
) -> int:
  """
  Scans a source or JSON syntax tree file, or every such file under a directory.

  Args:
      path: Input file or directory.
      import_paths: Extra module specifiers recognized as the library.
      styled_required: Require-style binding applied to every file.
      json_mode: If True, print a JSON report to stdout and suppress Rich logs.

  Returns:
      int: Exit code (0 on success, 1 if the path is missing, the
      configuration is invalid, or any file failed to load).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  try:
    config = DetectorConfig.load(top_level_import_paths=import_paths, styled_required=styled_required)
  except ValueError as e:
    log_error(escape(str(e)))
    return 1

  if path.is_file():
    files = [path]
  else:
    files = sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in _SCANNED_SUFFIXES)
  if not json_mode:
    log_info(f"Scanning {len(files)} file(s)...")

  state = DetectorState()
  reports = []
  failed = False

  for f in files:
    try:
      reports.append(_scan_file(f, config, state))
    except (OSError, TreeLoadError) as e:
      log_error(f"Failed to load {f.name}: {escape(str(e))}")
      failed = True

  if json_mode:
    print(json.dumps(reports, indent=2))
    return 1 if failed else 0

  for report in reports:
    _render_report(report)

  total = sum(len(r["tags"]) for r in reports)
  log_success(f"Found {total} tag(s) in {len(reports)} file(s).")
  return 1 if failed else 0
