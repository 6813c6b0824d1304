"""Dense state-action value table."""

from typing import Optional
import numpy as np

from .types import NUM_ACTIONS, ValueTableLoadError, DimensionMismatchError

# On-disk layout: int32 width, int32 height, then float32 values,
# state-major and action-minor. Little-endian on every host.
HEADER_DTYPE = np.dtype("<i4")
VALUE_DTYPE = np.dtype("<f4")
HEADER_SIZE = 2 * HEADER_DTYPE.itemsize


class ValueTable:
    """Q-values for every (state, action) pair of a width x height grid."""

    def __init__(self, width: int, height: int, values: Optional[np.ndarray] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Table dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

        shape = (width * height, NUM_ACTIONS)
        if values is None:
            self.values = np.zeros(shape, dtype=np.float32)
        else:
            values = np.asarray(values, dtype=np.float32)
            if values.size != width * height * NUM_ACTIONS:
                raise ValueError(
                    f"Expected {width * height * NUM_ACTIONS} values for a {width}x{height} table, "
                    f"got {values.size}"
                )
            self.values = values.reshape(shape).copy()

    @classmethod
    def zeros(cls, width: int, height: int) -> "ValueTable":
        return cls(width, height)

    @property
    def num_states(self) -> int:
        return self.width * self.height

    def get(self, state: int, action: int) -> float:
        """Get Q-value for state-action pair."""
        return float(self.values[state, action])

    def update(self, state: int, action: int, value: float):
        """Overwrite the Q-value for a state-action pair."""
        self.values[state, action] = value

    def state_values(self, state: int) -> np.ndarray:
        """Return a copy of the Q-values for all actions at a state."""
        return self.values[state].copy()

    def best_action(self, state: int) -> int:
        """Get the action with highest Q-value; ties go to the lowest action id."""
        return int(np.argmax(self.values[state]))

    def best_value(self, state: int) -> float:
        """Get the maximum Q-value at a state."""
        return float(self.values[state].max())

    def ensure_matches(self, width: int, height: int):
        """Raise if the table was built for a different grid size."""
        if (self.width, self.height) != (width, height):
            raise DimensionMismatchError((self.width, self.height), (width, height))

    def to_bytes(self) -> bytes:
        """Serialize as header + flattened float32 values."""
        header = np.array([self.width, self.height], dtype=HEADER_DTYPE)
        return header.tobytes() + self.values.astype(VALUE_DTYPE).tobytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "ValueTable":
        """Deserialize a table, rejecting truncated or malformed payloads."""
        if len(data) < HEADER_SIZE:
            raise ValueTableLoadError(
                f"Value table header truncated: {len(data)} of {HEADER_SIZE} bytes"
            )
        width, height = (int(v) for v in np.frombuffer(data, dtype=HEADER_DTYPE, count=2))
        if width <= 0 or height <= 0:
            raise ValueTableLoadError(f"Invalid table dimensions {width}x{height}")

        expected = width * height * NUM_ACTIONS * VALUE_DTYPE.itemsize
        payload = len(data) - HEADER_SIZE
        if payload != expected:
            raise ValueTableLoadError(
                f"Value table payload is {payload} bytes, expected {expected} for {width}x{height}"
            )

        values = np.frombuffer(data, dtype=VALUE_DTYPE, offset=HEADER_SIZE)
        return cls(width, height, values.astype(np.float32))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ValueTable):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.values.tobytes() == other.values.tobytes())

    def __repr__(self) -> str:
        return f"ValueTable({self.width}x{self.height})"
