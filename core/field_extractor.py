"""
Field extractor: decode the indexed LiquidationCall fields from topics 1..3.

topic[1] -> user, topic[2] -> collateral asset, topic[3] -> debt asset.

Each topic is a 32-byte ABI word. In CANONICAL mode the word is decoded as an
ABI `address` (12 leading zero bytes stripped, non-zero padding rejected) and
returned in EIP-55 checksum form. RAW_WORD mode keeps the full 32-byte word as
0x-prefixed lowercase hex.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi.abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from shared.constants import MIN_LIQUIDATION_TOPICS, TOPIC_LENGTH
from shared.types import AddressDecoding, LiquidationFields


class MalformedLogError(ValueError):
    """Raised when a topic word cannot be decoded as an address."""


def decode_topic_address(word: Any, decoding: AddressDecoding = AddressDecoding.CANONICAL) -> str:
    """Decode one indexed address topic according to the decoding mode."""
    if not isinstance(word, (bytes, bytearray)) or len(word) != TOPIC_LENGTH:
        raise MalformedLogError(f"Topic is not a {TOPIC_LENGTH}-byte word: {word!r}")

    if decoding is AddressDecoding.RAW_WORD:
        return "0x" + bytes(word).hex()

    try:
        (address,) = abi_decode(["address"], bytes(word))
    except DecodingError as e:
        raise MalformedLogError(f"Topic 0x{bytes(word).hex()} is not an address: {e}") from e
    return Web3.to_checksum_address(address)


def extract_fields(
    topics: Sequence[Any],
    decoding: AddressDecoding = AddressDecoding.CANONICAL,
) -> LiquidationFields | None:
    """
    Decode user, collateral asset and debt asset from a matched log's topics.

    Returns None when fewer than 4 topics are present; the caller still reports
    the liquidation, without field detail.

    Raises:
        MalformedLogError: a topic word has the wrong width or (canonical mode)
            non-zero padding.
    """
    if len(topics) < MIN_LIQUIDATION_TOPICS:
        return None

    return LiquidationFields(
        user=decode_topic_address(topics[1], decoding),
        collateral_asset=decode_topic_address(topics[2], decoding),
        debt_asset=decode_topic_address(topics[3], decoding),
    )
