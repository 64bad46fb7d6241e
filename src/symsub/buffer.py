"""
Growable Token Buffer
=====================

The tokenizer accumulates alphanumeric runs into a GrowableBuffer. The
buffer starts small (80 characters by default) and doubles whenever a run
does not fit. Capacity counts the terminator slot, so a buffer of capacity
N holds at most N - 1 characters of token text.

Growth is all-or-nothing: grow() either replaces the storage and doubles
the capacity, or leaves both untouched and returns False. A ceiling
(max_capacity) can be set to bound memory use; growing past it fails in
the same way an exhausted allocator would.

Example Usage
-------------
>>> buf = GrowableBuffer(capacity=4)
>>> for i, ch in enumerate("abc"):
...     buf.put(i, ch)
>>> buf.terminate(3)
>>> buf.text
'abc'
>>> buf.grow()
True
>>> buf.capacity
8
"""

from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Initial capacity used when none is given
DEFAULT_CAPACITY = 80

# Smallest usable capacity: one character plus the terminator
MIN_CAPACITY = 2


class GrowableBuffer:
    """
    Owned, resizable character storage for token accumulation.

    Attributes:
        capacity: Number of slots, terminator included
        max_capacity: Growth ceiling, or None for unbounded
        growths: Number of successful grow() calls so far
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        max_capacity: Optional[int] = None,
    ):
        if capacity < MIN_CAPACITY:
            raise ValueError(f"buffer capacity must be at least {MIN_CAPACITY}, got {capacity}")
        if max_capacity is not None and max_capacity < capacity:
            raise ValueError(
                f"max_capacity ({max_capacity}) is smaller than capacity ({capacity})"
            )

        self._storage: list[str] = [""] * capacity
        self._capacity = capacity
        self._length = 0
        self.max_capacity = max_capacity
        self.growths = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def text(self) -> str:
        """Contents up to the terminator."""
        return "".join(self._storage[:self._length])

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"GrowableBuffer({self.text!r}, capacity={self._capacity})"

    def fits(self, index: int) -> bool:
        """Return True if a character at index still leaves room for the terminator."""
        return index + 1 < self._capacity

    def put(self, index: int, char: str) -> None:
        """Store a character at index. The caller guarantees fits(index)."""
        self._storage[index] = char

    def terminate(self, length: int) -> None:
        """Mark the first `length` characters as the current contents."""
        if not 0 <= length < self._capacity:
            raise IndexError(f"terminator at {length} outside capacity {self._capacity}")
        self._length = length

    def reset(self) -> None:
        """Empty the contents, keeping the current storage."""
        self._length = 0

    def grow(self) -> bool:
        """
        Double the capacity, copying existing contents.

        Returns:
            True if the buffer grew, False if it could not. On False the
            storage, capacity and contents are exactly as before the call.
        """
        new_capacity = self._capacity * 2
        if self.max_capacity is not None and new_capacity > self.max_capacity:
            logger.debug(
                f"Buffer growth refused: {new_capacity} exceeds ceiling {self.max_capacity}"
            )
            return False

        try:
            storage = self._storage + [""] * self._capacity
        except MemoryError:
            logger.debug(f"Buffer growth to {new_capacity} failed: out of memory")
            return False

        self._storage = storage
        self._capacity = new_capacity
        self.growths += 1
        logger.debug(f"Buffer grown to {new_capacity} characters")
        return True
