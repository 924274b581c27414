"""
Information Element Walker
===========================

Yields the tag-length-value elements of a beacon body, starting after
the fixed fields at offset 36. The walk ends at the end of the frame or
at the first element whose declared length runs past it; a truncated
tail is dropped silently.

The walk always runs to one of those two ends. Stopping once a name and
channel are known would skip RSN or WPA elements placed later in the
frame and report a protected network as open.
"""

from __future__ import annotations

from typing import Iterator

from airwatch.core.models import ELEMENTS_OFFSET, Buffer, InformationElement
from airwatch.decoder.cursor import ByteCursor


def walk_elements(frame: Buffer, start: int = ELEMENTS_OFFSET) -> Iterator[InformationElement]:
    """Iterate over the information elements of *frame*.

    Frames no longer than *start* yield nothing. The iterator is
    forward-only and is meant to be consumed once.

    Args:
        frame: 802.11 frame bytes.
        start: Offset of the first element.
    """
    cursor = ByteCursor(frame, start)
    element = cursor.read_element()
    while element is not None:
        yield element
        element = cursor.read_element()
