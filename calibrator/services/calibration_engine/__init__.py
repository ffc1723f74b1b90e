"""
Calibration Engine - signal derivation, aggregation and interpretation.

Pipeline: raw input -> SignalDeriver -> MetricsAggregator -> Interpreter,
orchestrated per client by CalibrationSession and recorded in a RunLog.
"""

from .interpreter import Interpretation, Interpreter, Level, Readiness
from .metrics import Metrics, MetricsAggregator
from .registry import SessionRegistry
from .run_log import Run, RunLog
from .session import CalibrationSession, SessionSnapshot, SessionStatus
from .signals import DerivedSignals, SignalDeriver

__all__ = [
    "CalibrationSession",
    "DerivedSignals",
    "Interpretation",
    "Interpreter",
    "Level",
    "Metrics",
    "MetricsAggregator",
    "Readiness",
    "Run",
    "RunLog",
    "SessionRegistry",
    "SessionSnapshot",
    "SessionStatus",
    "SignalDeriver",
]
