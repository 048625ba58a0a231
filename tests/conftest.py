"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports (``src/`` and the ``tests`` helpers).
- A fresh run state per test so cached bindings never leak between tests.
- A context factory building a ``FileContext`` around a hand-written program.
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest

# Add src to path so we can import 'styled_detectors' without installing it
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src"))
sys.path.insert(0, str(root_path))

from styled_detectors.analysis.state import DetectorState, FileContext  # noqa: E402
from styled_detectors.tree.nodes import Program  # noqa: E402


@pytest.fixture
def state() -> DetectorState:
  """A run-scoped cache container, discarded after each test."""
  return DetectorState()


@pytest.fixture
def make_ctx(state: DetectorState) -> Callable[..., FileContext]:
  """
  Factory for file contexts sharing the test's run state.

  Usage::

      ctx = make_ctx(program(default_import("styled")), filename="A.js")
  """

  def _make(
    prog: Program,
    filename: str = "Component.js",
    styled_required: Optional[str] = None,
    top_level_import_paths: Optional[List[str]] = None,
  ) -> FileContext:
    return FileContext(
      filename=filename,
      program=prog,
      state=state,
      styled_required=styled_required,
      top_level_import_paths=list(top_level_import_paths or []),
    )

  return _make
