import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Metrics:
    """
    DTO holding the statistical summary of one calibration run.
    Computed over manual signals followed by derived signals.
    """
    min: float
    max: float
    mean: float   # rounded to 2 decimals
    count: int


class MetricsAggregator:
    """Reduces a numeric signal vector to min / max / mean / count."""

    MEAN_PRECISION = 2

    def aggregate(self, signals: Sequence[float]) -> Metrics:
        """
        Args:
            signals: Non-empty numeric sequence. Sentiment can be negative
                     and is scanned like any other value.

        Returns:
            Metrics with mean rounded by the built-in round()
            (half-to-even on the float value).

        Raises:
            ValueError: If signals is empty
        """
        if not signals:
            raise ValueError("Cannot aggregate an empty signal vector")

        lowest = signals[0]
        highest = signals[0]
        for value in signals:
            if value < lowest:
                lowest = value
            if value > highest:
                highest = value

        # Divide before summing so values near the float limit stay finite
        count = len(signals)
        mean = math.fsum(value / count for value in signals)

        return Metrics(
            min=lowest,
            max=highest,
            mean=round(mean, self.MEAN_PRECISION),
            count=count,
        )
