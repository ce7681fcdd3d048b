"""
Fixed-capacity rolling window utilities.

Classes:
    RollingWindow: List-backed circular buffer of the last N values.
    RollingSum: Rolling window with an O(1) running sum.
    RollingMinMax: Rolling window with O(1) amortized min/max.
"""

from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

from .exceptions import InvalidParameterError


def _validate_capacity(capacity: int, owner: str) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidParameterError("capacity", capacity, "positive integer (> 0)", owner)


class RollingWindow:
    """
    Circular buffer holding the last ``capacity`` values.

    Storage is a preallocated list plus a head index, so pushing never
    allocates once the window is constructed. Iteration yields values from
    oldest to newest.

    Example:
        >>> window = RollingWindow(3)
        >>> for x in [1, 2, 3, 4]:
        ...     evicted = window.push(x)
        >>> list(window), evicted
        ([2, 3, 4], 1)
    """

    __slots__ = ('capacity', '_slots', '_head', '_size')

    def __init__(self, capacity: int):
        _validate_capacity(capacity, self.__class__.__name__)
        self.capacity = capacity
        self._slots: List[Optional[float]] = [None] * capacity
        self._head = 0  # index of the oldest value
        self._size = 0

    def push(self, value: float) -> Optional[float]:
        """
        Append a value, overwriting the oldest one when the window is full.

        Returns:
            Optional[float]: The evicted value, or None if nothing was evicted.
        """
        if self._size == self.capacity:
            evicted = self._slots[self._head]
            self._slots[self._head] = value
            self._head = (self._head + 1) % self.capacity
            return evicted

        self._slots[(self._head + self._size) % self.capacity] = value
        self._size += 1
        return None

    @property
    def is_full(self) -> bool:
        return self._size == self.capacity

    @property
    def oldest(self) -> float:
        if not self._size:
            raise IndexError("oldest of empty RollingWindow")
        return self._slots[self._head]

    @property
    def newest(self) -> float:
        if not self._size:
            raise IndexError("newest of empty RollingWindow")
        return self._slots[(self._head + self._size - 1) % self.capacity]

    def clear(self) -> None:
        for i in range(self.capacity):
            self._slots[i] = None
        self._head = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[float]:
        for offset in range(self._size):
            yield self._slots[(self._head + offset) % self.capacity]

    def __getitem__(self, index: int) -> float:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("RollingWindow index out of range")
        return self._slots[(self._head + index) % self.capacity]

    def __repr__(self) -> str:
        return f"RollingWindow(capacity={self.capacity}, values={list(self)})"


class RollingSum:
    """
    Rolling window with a running sum.

    The value leaving the window is subtracted from the sum before the new
    one is added, so the aggregate always equals the sum of the buffered
    values without re-summing the window. Rounding error from every add and
    subtract is carried in a Neumaier compensation term.
    """

    __slots__ = ('_window', '_sum', '_compensation')

    def __init__(self, capacity: int):
        self._window = RollingWindow(capacity)
        self._sum = 0.0
        self._compensation = 0.0

    def _add(self, value: float) -> None:
        total = self._sum + value
        if abs(self._sum) >= abs(value):
            self._compensation += (self._sum - total) + value
        else:
            self._compensation += (value - total) + self._sum
        self._sum = total

    def push(self, value: float) -> Optional[float]:
        evicted = self._window.push(value)
        if evicted is not None:
            self._add(-evicted)
        self._add(value)
        return evicted

    @property
    def capacity(self) -> int:
        return self._window.capacity

    @property
    def sum(self) -> float:
        return self._sum + self._compensation

    @property
    def mean(self) -> float:
        """Mean of the buffered values (partial window during warm-up)."""
        if not len(self._window):
            raise ZeroDivisionError("mean of empty RollingSum")
        return self.sum / len(self._window)

    @property
    def is_full(self) -> bool:
        return self._window.is_full

    @property
    def window(self) -> RollingWindow:
        return self._window

    def clear(self) -> None:
        self._window.clear()
        self._sum = 0.0
        self._compensation = 0.0

    def __len__(self) -> int:
        return len(self._window)

    def __iter__(self) -> Iterator[float]:
        return iter(self._window)


class RollingMinMax:
    """
    Efficient O(1) amortized rolling min/max calculator.

    Two monotonic deques hold ``(value, sequence)`` candidates: the front of
    the min deque is the smallest value still inside the window, the front of
    the max deque the largest. Each value enters and leaves each deque at most
    once, so ``push`` is O(1) amortized regardless of the window size.

    Attributes:
        capacity (int): The lookback length.
        min (float): The current minimum value in the window.
        max (float): The current maximum value in the window.
    """

    def __init__(self, capacity: int):
        self._window = RollingWindow(capacity)
        self._min_deque: Deque[Tuple[float, int]] = deque()
        self._max_deque: Deque[Tuple[float, int]] = deque()
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._window.capacity

    def push(self, value: float) -> Optional[float]:
        """
        Add a value to the window.

        Returns:
            Optional[float]: The value that left the window, if any.
        """
        expired = self._count - self.capacity

        # Drop the candidate whose sequence just fell out of the window
        if self._min_deque and self._min_deque[0][1] <= expired:
            self._min_deque.popleft()
        if self._max_deque and self._max_deque[0][1] <= expired:
            self._max_deque.popleft()

        # Remove candidates dominated by the new value
        while self._min_deque and self._min_deque[-1][0] >= value:
            self._min_deque.pop()
        self._min_deque.append((value, self._count))

        while self._max_deque and self._max_deque[-1][0] <= value:
            self._max_deque.pop()
        self._max_deque.append((value, self._count))

        self._count += 1
        return self._window.push(value)

    @property
    def is_full(self) -> bool:
        return self._window.is_full

    @property
    def min(self) -> float:
        """
        Get the current minimum value.

        Returns:
            float: The minimum value, or float('inf') if empty.
        """
        return self._min_deque[0][0] if self._min_deque else float('inf')

    @property
    def max(self) -> float:
        """
        Get the current maximum value.

        Returns:
            float: The maximum value, or float('-inf') if empty.
        """
        return self._max_deque[0][0] if self._max_deque else float('-inf')

    def clear(self) -> None:
        """Reset the calculator to its initial state."""
        self._window.clear()
        self._min_deque.clear()
        self._max_deque.clear()
        self._count = 0

    def __len__(self) -> int:
        return len(self._window)

    def __iter__(self) -> Iterator[float]:
        return iter(self._window)
