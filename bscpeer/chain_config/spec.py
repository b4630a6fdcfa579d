"""Chain specifications of the BSC networks and fork identifiers (EIP-2124)."""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Optional

from bscpeer.chain_config.hardfork import (
    Chain,
    ChainHardforks,
    bsc_mainnet_hardforks,
    bsc_testnet_hardforks,
)

_ZERO_HASH = bytes(32)

BSC_MAINNET_GENESIS_HASH = bytes.fromhex(
    "0d21840abff46b96c84b2ac9e10e4f5cdaeb5693cb665db62a2f3b02d2d57b5b"
)
BSC_TESTNET_GENESIS_HASH = bytes.fromhex(
    "6d3c66c5357ec91d5c43af47e234a939b22557cbb552dc45bebbceeed90fbe34"
)


@dataclass(frozen=True)
class Head:
    """The head of a chain as announced to peers."""

    number: int = 0
    hash: bytes = _ZERO_HASH
    difficulty: int = 0
    total_difficulty: int = 0
    timestamp: int = 0


@dataclass(frozen=True)
class ForkId:
    """A fork identifier: the CRC32 of the genesis and past forks, and the next fork."""

    hash: bytes
    next: int


@dataclass(frozen=True)
class ChainSpec:
    """What a node needs to know about a chain to talk to its peers."""

    chain: Chain
    genesis_hash: bytes
    hardforks: ChainHardforks
    genesis_timestamp: int = 0
    paris_block_and_final_difficulty: Optional[tuple[int, int]] = (0, 0)
    base_fee_params: tuple[int, int] = (1, 1)
    prune_delete_limit: int = 3500
    deposit_contract: Optional[bytes] = None

    def fork_id(self, head: Head) -> ForkId:
        """The fork identifier of this chain at ``head``.

        Block-based forks are applied before timestamp-based ones; timestamp forks
        at or before the genesis timestamp are ignored.
        """
        checksum = zlib.crc32(self.genesis_hash)
        current_applied = 0

        for _, condition in self.hardforks:
            if not condition.is_block:
                continue
            block = condition.value
            if head.number < block:
                return ForkId(_pack(checksum), block)
            if block != current_applied:
                checksum = zlib.crc32(block.to_bytes(8, "big"), checksum)
                current_applied = block

        timestamps = (
            condition.value
            for _, condition in self.hardforks
            if condition.is_timestamp and condition.value > self.genesis_timestamp
        )
        for timestamp in timestamps:
            if head.timestamp < timestamp:
                return ForkId(_pack(checksum), timestamp)
            if timestamp != current_applied:
                checksum = zlib.crc32(timestamp.to_bytes(8, "big"), checksum)
                current_applied = timestamp

        return ForkId(_pack(checksum), 0)


def _pack(checksum: int) -> bytes:
    return (checksum & 0xFFFFFFFF).to_bytes(4, "big")


def bsc_mainnet() -> ChainSpec:
    """The BSC mainnet chain specification."""
    return ChainSpec(
        chain=Chain.bsc_mainnet(),
        genesis_hash=BSC_MAINNET_GENESIS_HASH,
        hardforks=bsc_mainnet_hardforks(),
    )


def bsc_mainnet_head() -> Head:
    """The head announced on BSC mainnet."""
    return Head(number=40_000_000, timestamp=1751250600)


def bsc_testnet() -> ChainSpec:
    """The BSC testnet (Chapel) chain specification."""
    return ChainSpec(
        chain=Chain.bsc_testnet(),
        genesis_hash=BSC_TESTNET_GENESIS_HASH,
        hardforks=bsc_testnet_hardforks(),
    )


def bsc_testnet_head() -> Head:
    """A fixed head announced on BSC testnet."""
    return Head(
        number=57_638_970,
        hash=bytes.fromhex(
            "74e802362fb536395ef7d9d82a87631d5fffaa584a891999d5e77b91bda33754"
        ),
        difficulty=2,
        total_difficulty=115_030_996,
        timestamp=1752059605,
    )