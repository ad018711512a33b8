"""Rating value objects - immutable and validated."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Stars:
    """Immutable star score."""
    value: int
    scale_min: int = 1
    scale_max: int = 5

    def __post_init__(self):
        """Validate star score."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Stars must be an integer, got {self.value!r}")
        if not self.scale_min <= self.value <= self.scale_max:
            raise ValueError(
                f"Stars must be between {self.scale_min} and {self.scale_max}, got {self.value}"
            )


@dataclass(frozen=True)
class RatingSummary:
    """Aggregate of the ratings of one vehicle."""
    count: int
    average: Optional[float] = None

    def __post_init__(self):
        """Validate summary."""
        if self.count < 0:
            raise ValueError(f"Rating count cannot be negative, got {self.count}")
        if self.count == 0 and self.average is not None:
            raise ValueError("An empty summary cannot carry an average")
