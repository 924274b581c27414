import pytest

from airwatch.decoder.frequency import channel_to_frequency


@pytest.mark.parametrize(
    "channel, expected",
    [
        (1, 2412),
        (6, 2437),
        (13, 2472),
        (14, 2484),
        (36, 5180),
        (40, 5200),
        (149, 5745),
        (165, 5825),
    ],
)
def test_mapped_channels(channel, expected):
    assert channel_to_frequency(channel) == expected


@pytest.mark.parametrize("channel", [None, 0, 15, 35, 166, 200, 255])
def test_unmapped_channels(channel):
    assert channel_to_frequency(channel) is None
