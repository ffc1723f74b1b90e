from dataclasses import dataclass
from enum import Enum
from typing import Optional

from calibrator.services.calibration_engine.metrics import Metrics
from calibrator.services.calibration_engine.signals import DerivedSignals

# --- QUALITATIVE LABELS ---

class Level(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

class Readiness(str, Enum):
    READY = "Ready"
    NOT_READY = "Not Ready"


@dataclass(frozen=True)
class Interpretation:
    """Qualitative classification of a calibration run."""
    pressure: Level
    load: Level
    clarity: Level
    readiness: Readiness


# Returned before anything has been calibrated; not an error state
BASELINE = Interpretation(
    pressure=Level.LOW,
    load=Level.LOW,
    clarity=Level.LOW,
    readiness=Readiness.NOT_READY,
)


class Interpreter:
    """
    Maps run metrics plus derived text features to four labels.

    All thresholds are strict (>) and checked from the top bucket down,
    so a value sitting exactly on a threshold lands in the lower bucket.
    """

    # Pressure: mean signal level + raw text length
    PRESSURE_HIGH = 200
    PRESSURE_MEDIUM = 80

    # Load: number of signals + number of sentences
    LOAD_HIGH = 15
    LOAD_MEDIUM = 8

    # Clarity is inverted: more sentences, lower clarity
    CLARITY_LOW = 6
    CLARITY_MEDIUM = 3

    def interpret(
        self,
        metrics: Optional[Metrics],
        derived: Optional[DerivedSignals] = None,
    ) -> Interpretation:
        """
        Args:
            metrics: Metrics of the run, or None when no run exists yet
            derived: Derived signals of the same run (optional)

        Returns:
            Interpretation; BASELINE when metrics is None
        """
        if metrics is None:
            return BASELINE

        text_length = derived.text_length if derived else 0
        # Zero sentences is floored to one
        sentence_count = (derived.sentence_count if derived else 0) or 1

        pressure = self._bucket(
            metrics.mean + text_length, self.PRESSURE_HIGH, self.PRESSURE_MEDIUM
        )
        load = self._bucket(
            metrics.count + sentence_count, self.LOAD_HIGH, self.LOAD_MEDIUM
        )

        if sentence_count > self.CLARITY_LOW:
            clarity = Level.LOW
        elif sentence_count > self.CLARITY_MEDIUM:
            clarity = Level.MEDIUM
        else:
            clarity = Level.HIGH

        if pressure != Level.HIGH and clarity == Level.HIGH:
            readiness = Readiness.READY
        else:
            readiness = Readiness.NOT_READY

        return Interpretation(
            pressure=pressure,
            load=load,
            clarity=clarity,
            readiness=readiness,
        )

    def _bucket(self, value, high, medium) -> Level:
        if value > high: return Level.HIGH
        if value > medium: return Level.MEDIUM
        return Level.LOW
