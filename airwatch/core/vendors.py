"""
Access Point Vendor Lookup
===========================

Maps the Organizationally Unique Identifier (the first three octets of a
hardware address) to the vendor name stored with each access point.

Only a handful of prefixes common on access points are bundled; anything
else resolves to ``"Unknown"``.

Reference:
    - IEEE Registration Authority. MA-L Public Listing.
      https://standards-oui.ieee.org/
"""

from __future__ import annotations

VENDOR_UNKNOWN = "Unknown"

OUI_VENDORS: dict[str, str] = {
    "00:03:7F": "Atheros",
    "00:03:93": "Apple",
    "00:0B:86": "Aruba",
    "00:0C:42": "MikroTik",
    "00:13:10": "Cisco-Linksys",
    "00:14:6C": "Netgear",
    "00:17:9A": "D-Link",
    "00:18:0A": "Cisco Meraki",
    "00:1D:7E": "Cisco-Linksys",
    "00:1E:58": "D-Link",
    "00:1F:33": "Netgear",
    "00:24:01": "D-Link",
    "00:25:9C": "Cisco-Linksys",
    "00:26:5A": "D-Link",
    "00:50:F2": "Microsoft",
    "00:E0:4C": "Realtek",
    "04:18:D6": "Ubiquiti",
    "10:FE:ED": "TP-Link",
    "14:CC:20": "TP-Link",
    "1C:7E:E5": "D-Link",
    "24:A4:3C": "Ubiquiti",
    "4C:5E:0C": "MikroTik",
    "50:C7:BF": "TP-Link",
    "80:2A:A8": "Ubiquiti",
    "A0:40:A0": "Netgear",
    "AC:84:C6": "TP-Link",
    "B0:48:7A": "TP-Link",
    "F0:9F:C2": "Ubiquiti",
    "F4:F2:6D": "TP-Link",
}


def lookup_vendor(hardware_address: str) -> str:
    """Return the vendor for *hardware_address* (``"AA:BB:CC:..."`` form).

    Locally administered addresses (bit 1 of the first octet set) carry
    no registered OUI and resolve to ``"Unknown"``.
    """
    if not hardware_address or len(hardware_address) < 8:
        return VENDOR_UNKNOWN
    prefix = hardware_address[:8].upper()
    try:
        if int(prefix[:2], 16) & 0x02:
            return VENDOR_UNKNOWN
    except ValueError:
        return VENDOR_UNKNOWN
    return OUI_VENDORS.get(prefix, VENDOR_UNKNOWN)
