"""
Calibration session - orchestrates one client's calibration pipeline.

Holds the draft manual signals and raw input, runs
SignalDeriver -> MetricsAggregator -> Interpreter on submit,
and records each result in a bounded RunLog.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from calibrator.services.calibration_engine.interpreter import Interpretation, Interpreter
from calibrator.services.calibration_engine.metrics import Metrics, MetricsAggregator
from calibrator.services.calibration_engine.run_log import Run, RunLog
from calibrator.services.calibration_engine.signals import SignalDeriver

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (10, 20, 30)
BLANK_INPUT_MESSAGE = "Raw input is required before submitting."


class SessionStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    ERROR = "error"


class BlankRawInputError(ValueError):
    """Raised when a submit is attempted with empty or whitespace-only input."""


@dataclass(frozen=True)
class SessionSnapshot:
    """Plain read-only view of a session for the presentation layer."""
    status: SessionStatus
    signals: List[float]
    raw_input: str
    error: Optional[str]
    metrics: Optional[Metrics]
    interpretation: Interpretation
    runs: List[Run]


class CalibrationSession:
    """
    Mutable calibration state plus its four mutations:
    update_signal, update_raw_input, submit and reset.

    Collaborators are injected so tests and callers can swap them;
    every mutation runs to completion synchronously.
    """

    def __init__(
        self,
        deriver: Optional[SignalDeriver] = None,
        aggregator: Optional[MetricsAggregator] = None,
        interpreter: Optional[Interpreter] = None,
        run_log: Optional[RunLog] = None,
    ):
        self.deriver = deriver or SignalDeriver()
        self.aggregator = aggregator or MetricsAggregator()
        self.interpreter = interpreter or Interpreter()
        self.run_log = run_log or RunLog()

        self.status = SessionStatus.IDLE
        self.signals: List[float] = list(DEFAULT_SIGNALS)
        self.raw_input = ""
        self.error: Optional[str] = None

    # --- MUTATIONS ---

    def update_signal(self, index: int, value: Any) -> bool:
        """
        Overwrites one manual signal.

        Non-numeric and non-finite values are ignored without surfacing
        an error. The index must refer to an existing signal.

        Returns:
            True if the signal changed, False if the value was ignored

        Raises:
            IndexError: If index is outside the signal list
        """
        if not 0 <= index < len(self.signals):
            raise IndexError(f"Signal index {index} out of range (0-{len(self.signals) - 1})")

        number = _coerce_number(value)
        if number is None:
            logger.debug(f"Ignoring non-finite value {value!r} for signal {index}")
            return False

        self.signals[index] = number
        return True

    def update_raw_input(self, value: str):
        self.raw_input = value

    def submit(self) -> Optional[Run]:
        """
        Runs the calibration pipeline on the current drafts.

        On blank input the status becomes ERROR, the message is stored
        in `error`, and nothing else changes. On success the new run is
        prepended to the log, the raw input draft is cleared and the
        manual signals are kept for the next run.

        Returns:
            The new Run, or None if validation failed
        """
        try:
            self._validate_raw_input()
        except BlankRawInputError as e:
            self.status = SessionStatus.ERROR
            self.error = str(e)
            logger.info("Submit rejected: blank raw input")
            return None

        # Transient display state; overwritten before submit returns
        self.status = SessionStatus.RUNNING
        self.error = None

        derived = self.deriver.derive(self.raw_input)
        combined = list(self.signals) + derived.as_vector()
        metrics = self.aggregator.aggregate(combined)
        run = self.run_log.record(combined, metrics, derived)

        self.raw_input = ""
        self.status = SessionStatus.COMPLETE

        logger.info(
            f"Run {run.id} recorded: mean={metrics.mean}, count={metrics.count}, "
            f"history={len(self.run_log)}"
        )
        return run

    def reset(self):
        self.status = SessionStatus.IDLE
        self.signals = list(DEFAULT_SIGNALS)
        self.raw_input = ""
        self.run_log.clear()
        self.error = None
        logger.info("Session reset to defaults")

    # --- READ SIDE ---

    def latest_interpretation(self) -> Interpretation:
        latest = self.run_log.latest
        if latest is None:
            return self.interpreter.interpret(None)
        return self.interpreter.interpret(latest.metrics, latest.derived)

    def snapshot(self) -> SessionSnapshot:
        latest = self.run_log.latest
        return SessionSnapshot(
            status=self.status,
            signals=list(self.signals),
            raw_input=self.raw_input,
            error=self.error,
            metrics=latest.metrics if latest else None,
            interpretation=self.latest_interpretation(),
            runs=self.run_log.runs,
        )

    def _validate_raw_input(self):
        if not self.raw_input.strip():
            raise BlankRawInputError(BLANK_INPUT_MESSAGE)


def _coerce_number(value: Any) -> Optional[float]:
    """Returns value as a finite number, or None if it is not one."""
    if isinstance(value, bool):
        return None
    # Ints too large for a float overflow instead of becoming inf
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number
