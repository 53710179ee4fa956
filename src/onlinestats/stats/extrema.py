"""Running minimum and maximum."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from onlinestats.core.stat import as_batch, check_same_type


@dataclass
class Extrema:
    """
    Running minimum and maximum.

    gamma has no effect: extrema are not averages. Merge takes the min of
    the mins and the max of the maxes whatever the ratio.

    Attributes:
        n: Number of observations seen
        min_val: Minimum value seen
        max_val: Maximum value seen
    """
    n: int = 0
    min_val: float = float('inf')
    max_val: float = float('-inf')

    def update(self, x: float, gamma: float) -> None:
        x = float(x)
        self.n += 1
        self.min_val = min(self.min_val, x)
        self.max_val = max(self.max_val, x)

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        xs = as_batch(xs)
        if xs.size == 0:
            return
        self.n += xs.size
        self.min_val = min(self.min_val, float(xs.min()))
        self.max_val = max(self.max_val, float(xs.max()))

    def merge(self, other: 'Extrema', ratio: float, n: Optional[int] = None) -> None:
        check_same_type(self, other)
        self.min_val = min(self.min_val, other.min_val)
        self.max_val = max(self.max_val, other.max_val)
        self.n += other.n if n is None else n

    @property
    def value(self) -> Tuple[float, float]:
        return (self.min_val, self.max_val)
