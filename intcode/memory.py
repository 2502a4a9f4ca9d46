from typing import Iterable, List, Optional

from intcode.errors import NegativeAddressError


class Memory:
    """Zero-initialised integer cells that grow on demand when addressed past the end."""

    def __init__(self, values: Optional[Iterable[int]] = None, capacity: int = 0):
        self.array: List[int] = list(values or [])
        if capacity > len(self.array):
            self.array.extend([0] * (capacity - len(self.array)))

    def __len__(self):
        return len(self.array)

    def _ensure(self, idx: int):
        if idx < 0:
            raise NegativeAddressError(idx)
        if idx >= len(self.array):
            self.array.extend([0] * (idx + 1 - len(self.array)))

    def read(self, idx: int) -> int:
        self._ensure(idx)
        return self.array[idx]

    def write(self, idx: int, value: int):
        self._ensure(idx)
        self.array[idx] = value

    def snapshot(self) -> List[int]:
        return self.array.copy()

    def copy(self) -> 'Memory':
        return Memory(self.array)
