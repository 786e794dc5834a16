"""Configuration for the cleaning pipeline."""

from dataclasses import dataclass

from imgclean.models import ThresholdStrategy

# 15x15 window
DEFAULT_HALF_WINDOW = 7

# Pixels darker than this fraction of their local mean become ink
DEFAULT_FACTOR = 0.85


@dataclass
class CleaningConfig:
    """
    Settings for one cleaning run.

    Args:
        strategy: Thresholding algorithm, enum member or its string value.
        half_window: Radius of the square neighborhood; side is 2*h+1.
        factor: Multiplier applied to the local mean by the integral strategy.
    """

    strategy: ThresholdStrategy = ThresholdStrategy.INTEGRAL
    half_window: int = DEFAULT_HALF_WINDOW
    factor: float = DEFAULT_FACTOR

    def __post_init__(self):
        if isinstance(self.strategy, str):
            try:
                self.strategy = ThresholdStrategy(self.strategy.lower())
            except ValueError:
                choices = ", ".join(s.value for s in ThresholdStrategy)
                raise ValueError(
                    f"Unknown strategy '{self.strategy}' (expected one of: {choices})"
                ) from None

        if self.half_window < 0:
            raise ValueError(f"half_window must be >= 0, got {self.half_window}")
        if self.factor <= 0:
            raise ValueError(f"factor must be > 0, got {self.factor}")

    @property
    def window_size(self) -> int:
        return 2 * self.half_window + 1
