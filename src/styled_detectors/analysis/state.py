"""
Detector State and File Context.

The detectors keep two caches for the lifetime of a transformation run:

1.  **Local Name Table**: ``(symbol, filename) -> local identifier or None``,
    filled by the import resolver.
2.  **Styled Tag Memo**: ids of nodes already confirmed to be the main
    ``styled`` constructor. Only positive results are stored, since a negative
    answer depends on the query (e.g. whether IIFE unwrapping was requested).

Both caches live on an explicit ``DetectorState`` rather than at module level.
A run creates one state and shares it between the ``FileContext`` objects of
the files it processes; parallel runs use one state per worker.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from styled_detectors.config import DetectorConfig
from styled_detectors.tree.nodes import Node, Program


@dataclass
class DetectorStats:
  """
  Counters describing cache behaviour during a run.
  """

  lookups: int = 0
  """Calls to the import resolver."""

  cache_hits: int = 0
  """Resolver calls answered from the local name table."""

  scans: int = 0
  """Resolver calls that walked the import declarations."""

  memo_hits: int = 0
  """Styled tag checks answered from the memo."""


class DetectorState:
  """
  Run-scoped caches shared by every file in a transformation run.
  """

  def __init__(self) -> None:
    """Initializes empty caches."""
    self.local_names: Dict[Tuple[str, str], Optional[str]] = {}
    self.styled_tags: Set[int] = set()
    self.stats = DetectorStats()

  def reset(self) -> None:
    """Discards all cached results, e.g. between independent runs."""
    self.local_names.clear()
    self.styled_tags.clear()
    self.stats = DetectorStats()

  def remember_styled(self, node: Node) -> None:
    """
    Records a node as a confirmed ``styled`` tag.

    Args:
        node: The matched tag node.
    """
    self.styled_tags.add(node.node_id)

  def is_known_styled(self, node: Node) -> bool:
    """
    Checks the memo for a node.

    Args:
        node: The candidate tag node.

    Returns:
        True if the node was confirmed earlier in this run.
    """
    return node.node_id in self.styled_tags


@dataclass
class FileContext:
  """
  Per-file query context passed to the resolver and detectors.

  Attributes:
      filename: Stable identity of the file, used to partition caches.
      program: Root of the parsed file.
      state: The run-scoped caches.
      styled_required: Local name bound by ``require('styled-components')``,
          recorded by an upstream pass. None for files using ``import``.
      top_level_import_paths: Extra module specifiers treated as the library.
  """

  filename: str
  program: Program
  state: DetectorState = field(default_factory=DetectorState)
  styled_required: Optional[str] = None
  top_level_import_paths: List[str] = field(default_factory=list)

  @classmethod
  def from_config(
    cls,
    filename: str,
    program: Program,
    config: DetectorConfig,
    state: Optional[DetectorState] = None,
  ) -> "FileContext":
    """
    Builds a context using the recognized paths and require binding of a config.

    Args:
        filename: Identity of the file.
        program: Root of the parsed file.
        config: Loaded detector configuration.
        state: Shared run state. A fresh one is created if omitted.

    Returns:
        FileContext: The populated context.
    """
    return cls(
      filename=filename,
      program=program,
      state=state if state is not None else DetectorState(),
      styled_required=config.styled_required,
      top_level_import_paths=list(config.top_level_import_paths),
    )
