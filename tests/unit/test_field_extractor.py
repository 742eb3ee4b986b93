"""
Unit tests for core/field_extractor.py.

Tests cover canonical (padding-stripped) and raw-word decoding, the 4-topic
threshold, fixed user/collateral/debt ordering, and malformed topic words.
"""

from __future__ import annotations

import pytest
from web3 import Web3

from conftest import (
    SAMPLE_COLLATERAL_ASSET,
    SAMPLE_DEBT_ASSET,
    SAMPLE_USER_ADDRESS,
    topic_word,
)
from core.field_extractor import MalformedLogError, decode_topic_address, extract_fields
from shared.constants import LIQUIDATION_CALL_TOPIC
from shared.types import AddressDecoding

FULL_TOPICS = (
    LIQUIDATION_CALL_TOPIC,
    topic_word(SAMPLE_USER_ADDRESS),
    topic_word(SAMPLE_COLLATERAL_ASSET),
    topic_word(SAMPLE_DEBT_ASSET),
)


class TestDecodeTopicAddress:

    def test_canonical_strips_padding(self):
        decoded = decode_topic_address(topic_word(SAMPLE_USER_ADDRESS))
        assert decoded == Web3.to_checksum_address(SAMPLE_USER_ADDRESS)
        assert len(decoded) == 42

    def test_raw_word_keeps_full_32_bytes(self):
        decoded = decode_topic_address(topic_word(SAMPLE_USER_ADDRESS), AddressDecoding.RAW_WORD)
        assert decoded == "0x" + "00" * 12 + SAMPLE_USER_ADDRESS[2:].lower()
        assert len(decoded) == 66

    def test_zero_address(self):
        assert decode_topic_address(b"\x00" * 32) == "0x" + "00" * 20

    def test_non_zero_padding_rejected_in_canonical_mode(self):
        word = b"\x01" + b"\x00" * 11 + bytes.fromhex(SAMPLE_USER_ADDRESS[2:])
        with pytest.raises(MalformedLogError):
            decode_topic_address(word)

    def test_non_zero_padding_kept_in_raw_mode(self):
        word = b"\x01" + b"\x00" * 11 + bytes.fromhex(SAMPLE_USER_ADDRESS[2:])
        assert decode_topic_address(word, AddressDecoding.RAW_WORD) == "0x" + word.hex()

    @pytest.mark.parametrize("word", [b"", b"\x00" * 20, b"\x00" * 33, "0x" + "00" * 32, None])
    def test_wrong_width_or_type_rejected(self, word):
        with pytest.raises(MalformedLogError):
            decode_topic_address(word)


class TestExtractFields:

    def test_fields_in_fixed_order(self):
        fields = extract_fields(FULL_TOPICS)
        assert fields is not None
        assert fields.user == Web3.to_checksum_address(SAMPLE_USER_ADDRESS)
        assert fields.collateral_asset == Web3.to_checksum_address(SAMPLE_COLLATERAL_ASSET)
        assert fields.debt_asset == Web3.to_checksum_address(SAMPLE_DEBT_ASSET)

    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    def test_fewer_than_four_topics_yields_no_fields(self, count):
        assert extract_fields(FULL_TOPICS[:count]) is None

    def test_extra_topics_are_ignored(self):
        fields = extract_fields(FULL_TOPICS + (b"\xff" * 32,))
        assert fields == extract_fields(FULL_TOPICS)

    def test_raw_word_mode(self):
        fields = extract_fields(FULL_TOPICS, AddressDecoding.RAW_WORD)
        assert fields.user == "0x" + FULL_TOPICS[1].hex()
        assert fields.collateral_asset == "0x" + FULL_TOPICS[2].hex()
        assert fields.debt_asset == "0x" + FULL_TOPICS[3].hex()

    def test_malformed_field_topic_raises(self):
        topics = FULL_TOPICS[:3] + (b"\x00" * 31,)
        with pytest.raises(MalformedLogError):
            extract_fields(topics)
