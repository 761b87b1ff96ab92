"""
Transform Trace Logger.

Records what happened during one engine run:
1. Lifecycle phases (Configuration, Parsing, Rewriting).
2. Call-site mutations (the console call before and after prefix injection).
3. Warnings raised by the host driver.

The output is a list of plain dictionaries suitable for JSON serialization.
"""

import time
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  AST_MUTATION = "ast_mutation"
  WARNING = "warning"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records engine events in memory.
  One instance is created per `PrefixEngine.run` call.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase. Returns the Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_mutation(self, node_type: str, before: str, after: str):
    self._log_simple(TraceEventType.AST_MUTATION, f"Transformed {node_type}", {"before": before, "after": after})

  def log_warning(self, message: str):
    self._log_simple(TraceEventType.WARNING, message, {"level": "warning"})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
