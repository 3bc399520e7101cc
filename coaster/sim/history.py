# Fixed-capacity g-force history for smoothing

import numpy as np


class GForceHistory:
    """Ring buffer of the most recent total-g samples.

    Preallocated to ``capacity``; once full, each push overwrites the
    oldest sample. ``mean()`` averages only the samples written so far.
    """

    def __init__(self, capacity: int = 10):
        """Initialize history.

        Args:
            capacity: Maximum number of samples kept
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self.capacity = capacity
        self._values = np.zeros(capacity, dtype=np.float64)

        self.ptr = 0   # Next write position
        self.size = 0  # Current size

    def push(self, value: float) -> None:
        self._values[self.ptr] = value
        self.ptr = (self.ptr + 1) % self.capacity
        self.size = min(self.size + 1, self.capacity)

    def mean(self) -> float:
        """Average of stored samples, 0.0 when empty."""
        if self.size == 0:
            return 0.0
        return float(np.mean(self._values[:self.size]))

    def values(self) -> np.ndarray:
        """Stored samples, oldest first."""
        if self.size < self.capacity:
            return self._values[:self.size].copy()
        return np.roll(self._values, -self.ptr)

    def clear(self) -> None:
        self.ptr = 0
        self.size = 0

    def __len__(self) -> int:
        return self.size
