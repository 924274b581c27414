"""
Network Interface Lookup
=========================

Resolves the capture interface from a human-readable adapter keyword,
matched against the description (and name) of every interface Scapy
knows about. On Windows the description is the adapter's product name;
on Linux it usually equals the interface name.

Reference:
    - Biondi, P. (2024). Scapy Documentation: Network interfaces.
      https://scapy.readthedocs.io/en/latest/routing.html
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from shared.logger import AirLogger

from airwatch.core.errors import AdapterNotFound

logger = AirLogger("collectors.interfaces")


def list_interfaces() -> list[Any]:
    """Every network interface known to Scapy."""
    from scapy.config import conf  # type: ignore[import-untyped]

    return list(conf.ifaces.values())


def match_interface(interfaces: Iterable[Any], keyword: str) -> Optional[str]:
    """Return the name of the first interface whose description contains *keyword*.

    Matching is case-insensitive. The interface name is tried as well so
    a plain name such as ``wlan0mon`` also resolves.
    """
    needle = keyword.casefold()
    for iface in interfaces:
        description = str(getattr(iface, "description", "") or "")
        name = str(getattr(iface, "name", "") or "")
        if needle in description.casefold() or needle in name.casefold():
            return getattr(iface, "network_name", None) or name
    return None


def find_interface(keyword: str) -> str:
    """Resolve *keyword* to a capture interface name.

    Raises:
        AdapterNotFound: If no interface matches.
    """
    name = match_interface(list_interfaces(), keyword)
    if name is None:
        raise AdapterNotFound(keyword)
    logger.info("Adapter '%s' resolved to interface %s", keyword, name)
    return name
