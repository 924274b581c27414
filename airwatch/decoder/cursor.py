"""
Bounds-checked Byte Cursor
===========================

:class:`ByteCursor` owns a read position over an immutable buffer and
exposes only reads that check the remaining length first. A read that
would pass the end raises :class:`CursorOverrun` and leaves the position
unchanged; nothing ever indexes past the buffer.
"""

from __future__ import annotations

import struct
from typing import Optional

from airwatch.core.models import Buffer, InformationElement


class CursorOverrun(IndexError):
    """A read requested more bytes than remain in the buffer."""


class ByteCursor:
    """Forward-only reader over a byte buffer.

    Usage::

        cursor = ByteCursor(frame, offset=36)
        element = cursor.read_element()
        while element is not None:
            ...
            element = cursor.read_element()
    """

    __slots__ = ("_view", "_offset")

    def __init__(self, data: Buffer, offset: int = 0) -> None:
        view = memoryview(data)
        self._view = view if view.format == "B" else view.cast("B")
        if offset < 0:
            raise ValueError(f"Negative cursor offset: {offset}")
        # Offsets past the end leave nothing to read
        self._offset = min(offset, len(self._view))

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._view) - self._offset

    def _require(self, count: int) -> None:
        if count > self.remaining:
            raise CursorOverrun(
                f"Read of {count} bytes at offset {self._offset} "
                f"exceeds buffer ({self.remaining} remaining)"
            )

    def read_u8(self) -> int:
        self._require(1)
        value = self._view[self._offset]
        self._offset += 1
        return value

    def read_i8(self) -> int:
        self._require(1)
        value = struct.unpack_from("b", self._view, self._offset)[0]
        self._offset += 1
        return value

    def read_u16_le(self) -> int:
        self._require(2)
        value = struct.unpack_from("<H", self._view, self._offset)[0]
        self._offset += 2
        return value

    def read_bytes(self, count: int) -> memoryview:
        """Return a view of the next *count* bytes (no copy)."""
        if count < 0:
            raise ValueError(f"Negative read length: {count}")
        self._require(count)
        view = self._view[self._offset:self._offset + count]
        self._offset += count
        return view

    def skip(self, count: int) -> None:
        self.read_bytes(count)

    def read_element(self) -> Optional[InformationElement]:
        """Read one tag-length-value element.

        Returns ``None`` when fewer than two header bytes remain or the
        declared length runs past the end of the buffer. In both cases the
        position is not advanced.
        """
        if self.remaining < 2:
            return None
        element_id = self._view[self._offset]
        length = self._view[self._offset + 1]
        if 2 + length > self.remaining:
            return None
        self._offset += 2
        return InformationElement(
            id=element_id,
            length=length,
            payload=self.read_bytes(length),
        )
