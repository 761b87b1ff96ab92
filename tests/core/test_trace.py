"""
Tests for the Tracing System.
"""

from console_prefix.core.tracer import TraceLogger, TraceEventType


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END
  assert events[3]["parent_id"] == p1


def test_end_phase_without_active_phase_is_noop():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.export() == []


def test_mutation_metadata():
  logger = TraceLogger()
  phase = logger.start_phase("Prefix Injection")
  logger.log_mutation("Call", "console.log(1)", 'console.log("p", 1)')

  events = logger.export()
  mutation = events[-1]
  assert mutation["type"] == TraceEventType.AST_MUTATION
  assert mutation["parent_id"] == phase
  assert mutation["metadata"] == {"before": "console.log(1)", "after": 'console.log("p", 1)'}


def test_warning_event():
  logger = TraceLogger()
  logger.log_warning("empty prefix")

  events = logger.export()
  assert events[0]["type"] == TraceEventType.WARNING
  assert events[0]["description"] == "empty prefix"
  assert events[0]["parent_id"] is None
