"""
Address filter: membership of a log's emitting contract in the monitored set.

Addresses are compared as raw 20-byte values. Config literals may use any
hex casing (EIP-55 checksum or lowercase) and are decoded to bytes once at
construction, so casing and 0x-prefix differences can never cause a miss.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hexbytes import HexBytes
from web3 import Web3

from shared.constants import ADDRESS_LENGTH


def address_to_bytes(address: str | bytes) -> bytes:
    """Decode a hex or raw address into 20 bytes. Raises ValueError on bad width."""
    raw = bytes(HexBytes(address))
    if len(raw) != ADDRESS_LENGTH:
        raise ValueError(f"Expected {ADDRESS_LENGTH}-byte address, got {len(raw)} bytes: {address!r}")
    return raw


class MonitoredContracts:
    """
    Immutable registry of the contract addresses the detector watches.

    Maps raw address bytes to a display name ("Aave V3 Pool").
    """

    def __init__(self, contracts: Mapping[str, str | bytes] | Iterable[str | bytes]) -> None:
        if isinstance(contracts, Mapping):
            pairs = [(address, name) for name, address in contracts.items()]
        else:
            pairs = [(address, None) for address in contracts]

        self._names: dict[bytes, str | None] = {
            address_to_bytes(address): name for address, name in pairs
        }
        self._monitored: frozenset[bytes] = frozenset(self._names)

    def is_monitored(self, address: Any) -> bool:
        """True if address is a 20-byte value in the monitored set. Never raises."""
        if not isinstance(address, (bytes, bytearray)) or len(address) != ADDRESS_LENGTH:
            return False
        return bytes(address) in self._monitored

    def get_name(self, address: bytes) -> str | None:
        return self._names.get(bytes(address))

    def get_all_addresses(self) -> list[str]:
        """Checksum addresses of all monitored contracts, in registration order."""
        return [Web3.to_checksum_address(address) for address in self._names]

    def count(self) -> int:
        return len(self._monitored)

    def __contains__(self, address: object) -> bool:
        return self.is_monitored(address)

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"MonitoredContracts({self.get_all_addresses()!r})"
