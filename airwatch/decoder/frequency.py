"""
Channel to Centre Frequency Mapping
====================================

Reference:
    - IEEE. (2020). IEEE Std 802.11-2020. Annex E: Country information
      and operating classes.
"""

from __future__ import annotations

from typing import Optional

BAND_24GHZ_CHANNELS = range(1, 14)
BAND_24GHZ_BASE_MHZ = 2407
CHANNEL_14_MHZ = 2484
BAND_5GHZ_CHANNELS = range(36, 166)
BAND_5GHZ_BASE_MHZ = 5000
CHANNEL_SPACING_MHZ = 5


def channel_to_frequency(channel: Optional[int]) -> Optional[int]:
    """Map a channel number to its centre frequency in MHz.

    Channels 1-13 map to ``2407 + 5 * ch``, channel 14 to 2484 MHz and
    the contiguous range 36-165 to ``5000 + 5 * ch``. Anything else,
    including ``None``, is unmapped and yields ``None``.

    Examples:
        >>> channel_to_frequency(6)
        2437
        >>> channel_to_frequency(40)
        5200
        >>> channel_to_frequency(200) is None
        True
    """
    if channel is None:
        return None
    if channel in BAND_24GHZ_CHANNELS:
        return BAND_24GHZ_BASE_MHZ + CHANNEL_SPACING_MHZ * channel
    if channel == 14:
        return CHANNEL_14_MHZ
    if channel in BAND_5GHZ_CHANNELS:
        return BAND_5GHZ_BASE_MHZ + CHANNEL_SPACING_MHZ * channel
    return None
