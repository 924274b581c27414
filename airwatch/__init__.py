"""
Airwatch -- Passive 802.11 Beacon Monitor
==========================================

Airwatch listens on a monitor-mode wireless interface (or replays a
stored capture), decodes every Beacon frame into the access point's
hardware address, network name, channel, frequency and inferred
encryption level plus a signal sample, and records the results in a
SQLite database.

Modules:
    decoder         -- Pure beacon decoding pipeline
    core.models     -- Domain types
    core.errors     -- Exception hierarchy
    core.engine     -- Decode-and-store loop
    collectors      -- Interface lookup, live capture and PCAP replay
    storage         -- SQLite persistence
    output          -- Console output
    cli             -- Click-based command-line interface

References:
    - IEEE. (2020). IEEE Std 802.11-2020: Wireless LAN MAC and PHY
      Specifications.
    - Radiotap. https://www.radiotap.org/
"""

__version__ = "1.0.0"
__tool__ = "Airwatch"
__description__ = "Passive 802.11 Beacon Monitor"
