# =============================================================================
# test_buffer.py - Growable Buffer Unit Tests
# =============================================================================
# Tests for the doubling token buffer.
#
# Test coverage includes:
#   - Construction limits
#   - Writing, terminating and reading back text
#   - Successful growth (contents preserved, capacity doubled)
#   - Failed growth leaves the buffer untouched
# =============================================================================

import pytest
from symsub.buffer import DEFAULT_CAPACITY, GrowableBuffer


def fill(buf: GrowableBuffer, text: str) -> None:
    """Write text at the start of the buffer and terminate it."""
    for i, ch in enumerate(text):
        buf.put(i, ch)
    buf.terminate(len(text))


class TestConstruction:
    """Buffer creation."""

    def test_default_capacity(self):
        """Default capacity is 80 with no ceiling."""
        buf = GrowableBuffer()
        assert buf.capacity == DEFAULT_CAPACITY == 80
        assert buf.max_capacity is None
        assert buf.text == ""
        assert len(buf) == 0

    def test_capacity_too_small(self):
        """A buffer must hold at least one character plus the terminator."""
        with pytest.raises(ValueError):
            GrowableBuffer(capacity=1)

    def test_ceiling_below_capacity(self):
        """The ceiling cannot be smaller than the starting capacity."""
        with pytest.raises(ValueError):
            GrowableBuffer(capacity=8, max_capacity=4)


class TestContents:
    """Writing and reading text."""

    def test_fill_and_read(self):
        buf = GrowableBuffer(capacity=8)
        fill(buf, "hello")
        assert buf.text == "hello"
        assert len(buf) == 5

    def test_fits_reserves_terminator(self):
        """The last slot is reserved for the terminator."""
        buf = GrowableBuffer(capacity=3)
        assert buf.fits(0)
        assert buf.fits(1)
        assert not buf.fits(2)

    def test_terminate_shortens(self):
        """Terminating earlier exposes only the leading characters."""
        buf = GrowableBuffer(capacity=8)
        fill(buf, "hello")
        buf.terminate(2)
        assert buf.text == "he"

    def test_terminate_out_of_range(self):
        buf = GrowableBuffer(capacity=4)
        with pytest.raises(IndexError):
            buf.terminate(4)

    def test_reset(self):
        buf = GrowableBuffer(capacity=8)
        fill(buf, "abc")
        buf.reset()
        assert buf.text == ""
        assert buf.capacity == 8


class TestGrowth:
    """Doubling and failure behavior."""

    def test_grow_doubles_and_keeps_contents(self):
        buf = GrowableBuffer(capacity=4)
        fill(buf, "abc")
        assert buf.grow() is True
        assert buf.capacity == 8
        assert buf.text == "abc"
        assert buf.growths == 1

    def test_repeated_growth(self):
        buf = GrowableBuffer(capacity=2)
        for _ in range(5):
            assert buf.grow()
        assert buf.capacity == 64
        assert buf.growths == 5

    def test_grow_up_to_ceiling(self):
        """Growth exactly to the ceiling is allowed."""
        buf = GrowableBuffer(capacity=4, max_capacity=8)
        assert buf.grow()
        assert buf.capacity == 8

    def test_failed_growth_leaves_buffer_unchanged(self):
        """Growth past the ceiling fails without touching anything."""
        buf = GrowableBuffer(capacity=4, max_capacity=4)
        fill(buf, "abc")
        assert buf.grow() is False
        assert buf.capacity == 4
        assert buf.text == "abc"
        assert buf.growths == 0

    def test_memory_error_is_failure(self):
        """Running out of memory reports failure instead of raising."""
        buf = GrowableBuffer(capacity=4)
        fill(buf, "ab")

        class ExhaustedList(list):
            def __add__(self, other):
                raise MemoryError

        buf._storage = ExhaustedList(buf._storage)
        assert buf.grow() is False
        assert buf.capacity == 4
        assert buf.text == "ab"
