"""
Attribute Aggregator
=====================

Folds a beacon's element sequence into its name, channel and encryption
level.

Precedence rules:
    - SSID (id 0): the first element sets the name; a hidden (empty or
      all-NUL) name may later be replaced by a non-empty one, a real
      name is never replaced. Without any SSID element the name is
      ``"Unknown"``.
    - DS Parameter Set (id 3, length 1): the last one wins.
    - RSN (id 48): forces ``WPA2/WPA3``.
    - Vendor specific (id 221) carrying the WPA OUI ``00:50:F2:01``:
      merges ``WPA`` into the current level, which only raises it from
      ``Open``.

The encryption rules live in :data:`ENCRYPTION_RULES` so the precedence
is table data rather than branch order.

Reference:
    - IEEE. (2020). IEEE Std 802.11-2020. Section 9.4.2.2 (SSID),
      9.4.2.4 (DSSS Parameter Set), 9.4.2.24 (RSNE), 9.4.2.25
      (Vendor Specific).
"""

from __future__ import annotations

from typing import Callable, Iterable, NamedTuple, Optional

from airwatch.core.models import (
    NAME_HIDDEN,
    NAME_UNKNOWN,
    WPA_OUI_TYPE,
    BeaconAttributes,
    ElementId,
    EncryptionLevel,
    InformationElement,
)


# ---------------------------------------------------------------------------
# Encryption merge
# ---------------------------------------------------------------------------


def merge_encryption(current: EncryptionLevel, found: EncryptionLevel) -> EncryptionLevel:
    """Monotonic merge: the stronger of the two levels."""
    return max(current, found)


def force_encryption(current: EncryptionLevel, found: EncryptionLevel) -> EncryptionLevel:
    """Unconditional assignment of *found*."""
    return found


class EncryptionRule(NamedTuple):
    """How one element kind contributes to the encryption level."""

    matches: Callable[[InformationElement], bool]
    level: EncryptionLevel
    combine: Callable[[EncryptionLevel, EncryptionLevel], EncryptionLevel]


def _is_wpa_vendor_element(element: InformationElement) -> bool:
    return element.length >= len(WPA_OUI_TYPE) and element.startswith(WPA_OUI_TYPE)


ENCRYPTION_RULES: dict[int, EncryptionRule] = {
    ElementId.RSN: EncryptionRule(
        matches=lambda element: True,
        level=EncryptionLevel.WPA2_WPA3,
        combine=force_encryption,
    ),
    ElementId.VENDOR_SPECIFIC: EncryptionRule(
        matches=_is_wpa_vendor_element,
        level=EncryptionLevel.WPA,
        combine=merge_encryption,
    ),
}


# ---------------------------------------------------------------------------
# Name decoding
# ---------------------------------------------------------------------------


def decode_name(payload: bytes | memoryview) -> str:
    """Decode an SSID payload, replacing invalid UTF-8 rather than failing.

    NUL padding at either end and surrounding whitespace are stripped.
    An empty result means the network hides its name.
    """
    text = bytes(payload).decode("utf-8", errors="replace")
    return text.strip("\x00").strip()


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class AttributeAggregator:
    """Accumulates beacon attributes one element at a time.

    Usage::

        aggregator = AttributeAggregator()
        for element in walk_elements(frame):
            aggregator.feed(element)
        attributes = aggregator.result()
    """

    def __init__(self) -> None:
        self.name: Optional[str] = None
        self.channel: Optional[int] = None
        self.encryption: EncryptionLevel = EncryptionLevel.OPEN

    def feed(self, element: InformationElement) -> None:
        if element.id == ElementId.SSID:
            self._apply_name(element)
        elif element.id == ElementId.DS_PARAMETER_SET and element.length == 1:
            self.channel = element.payload[0]

        rule = ENCRYPTION_RULES.get(element.id)
        if rule is not None and rule.matches(element):
            self.encryption = rule.combine(self.encryption, rule.level)

    def _apply_name(self, element: InformationElement) -> None:
        candidate = decode_name(element.payload)
        if self.name is None:
            self.name = candidate or NAME_HIDDEN
        elif self.name == NAME_HIDDEN and candidate:
            self.name = candidate

    def result(self) -> BeaconAttributes:
        return BeaconAttributes(
            name=self.name if self.name is not None else NAME_UNKNOWN,
            channel=self.channel,
            encryption=self.encryption,
        )


def aggregate_elements(elements: Iterable[InformationElement]) -> BeaconAttributes:
    """Fold a whole element sequence into :class:`BeaconAttributes`."""
    aggregator = AttributeAggregator()
    for element in elements:
        aggregator.feed(element)
    return aggregator.result()
