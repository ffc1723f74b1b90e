from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from calibrator.services.calibration_engine.metrics import Metrics
from calibrator.services.calibration_engine.signals import DerivedSignals


@dataclass(frozen=True)
class Run:
    """
    Immutable record of one calibration.
    `signals` is the full vector the metrics were computed from:
    manual signals first, derived signals appended.
    """
    id: int
    timestamp: datetime
    signals: Tuple[float, ...]
    metrics: Metrics
    derived: DerivedSignals


class RunLog:
    """
    Newest-first history of calibration runs, capped at MAX_RUNS.
    Entries past the cap are dropped silently, oldest first.
    """

    MAX_RUNS = 5

    def __init__(self):
        self._runs: List[Run] = []
        # Runs created since the last clear; trimming does not lower it
        self._created = 0

    def record(
        self,
        signals: List[float],
        metrics: Metrics,
        derived: DerivedSignals,
    ) -> Run:
        """Creates the next run and prepends it to the log."""
        run = Run(
            id=self._created + 1,
            timestamp=datetime.now(),
            signals=tuple(signals),
            metrics=metrics,
            derived=derived,
        )
        self._created += 1
        self._runs.insert(0, run)
        del self._runs[self.MAX_RUNS:]
        return run

    def clear(self):
        self._runs = []
        self._created = 0

    @property
    def latest(self) -> Optional[Run]:
        return self._runs[0] if self._runs else None

    @property
    def runs(self) -> List[Run]:
        return list(self._runs)

    def __len__(self) -> int:
        return len(self._runs)
