"""DNS name resolution into candidate base URLs."""

from __future__ import annotations

import logging
import socket
from typing import Callable

from ..exceptions import ResolutionError

logger = logging.getLogger(__name__)

AddressLookup = Callable[[str], "list[str]"]
ReverseLookup = Callable[[str], str]


def system_lookup(name: str) -> list[str]:
    """Return every address bound to *name*, in resolver order, without duplicates.

    getaddrinfo yields one entry per socket type, so the same address
    usually appears several times.
    """
    infos = socket.getaddrinfo(name, None)
    addresses: list[str] = []
    for _family, _type, _proto, _canonname, sockaddr in infos:
        address = sockaddr[0]
        if address not in addresses:
            addresses.append(address)
    return addresses


def system_reverse_lookup(address: str) -> str:
    """Return the canonical host name of *address*, or the address literal if it has none."""
    try:
        return socket.gethostbyaddr(address)[0]
    except OSError:
        logger.debug("No reverse DNS entry for %s, using the address", address)
        return f"[{address}]" if ":" in address else address


class DnsResolver:
    """Resolves a service name to ``https://<host>/`` candidate URLs."""

    def __init__(
        self,
        lookup: AddressLookup = system_lookup,
        reverse_lookup: ReverseLookup = system_reverse_lookup,
    ):
        self._lookup = lookup
        self._reverse_lookup = reverse_lookup

    def resolve(self, name: str) -> list[str]:
        """Return candidate URLs in the order the addresses were resolved."""
        try:
            addresses = self._lookup(name)
        except OSError as exc:
            raise ResolutionError(f"Could not resolve {name}: {exc}", name=name) from exc

        if not addresses:
            raise ResolutionError(f"No addresses found for {name}", name=name)

        urls = [f"https://{self._reverse_lookup(address)}/" for address in addresses]
        logger.debug("Resolved %s to %s", name, urls)
        return urls
