"""Tracking of the chain height seen from peers and requests for missing blocks."""

from __future__ import annotations

import asyncio
import enum
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Protocol, Sequence

logger = logging.getLogger(__name__)

_MISSING_BLOCKS_WINDOW = 5
_MAX_PENDING_REQUESTS = 100
_PENDING_KEEP_DEPTH = 50


class HeadersDirection(enum.Enum):
    """Direction in which block headers are walked."""

    RISING = "rising"
    FALLING = "falling"


@dataclass(frozen=True)
class GetBlockHeaders:
    """A request for block headers starting at a block."""

    start_block: int
    limit: int
    skip: int
    direction: HeadersDirection


@dataclass(frozen=True)
class NewBlock:
    """Event: a peer announced a full block."""

    peer_id: Hashable
    block_number: int
    block_hash: str
    transaction_count: int


@dataclass(frozen=True)
class NewBlockHashes:
    """Event: a peer announced block hashes."""

    peer_id: Hashable
    block_numbers: list[int]


@dataclass(frozen=True)
class NewBlockMessage:
    """A full block as broadcast by a peer."""

    hash: bytes
    number: int
    parent_hash: bytes
    timestamp: int
    gas_limit: int
    gas_used: int
    transactions: Sequence[Any] = ()


@dataclass(frozen=True)
class BlockHashNumber:
    """A block hash together with its number."""

    hash: bytes
    number: int


class Network(Protocol):
    def send_request(self, peer_id: Hashable, request: GetBlockHeaders) -> None: ...


class BlockStateManager:
    """Thread-safe view of connected peers, the current height and pending requests."""

    def __init__(self, starting_height: int = 0) -> None:
        self._lock = threading.RLock()
        self.current_height = starting_height
        self.peerset: list[Hashable] = []
        self.pending_requests: set[int] = set()
        self.received_blocks: set[int] = set()

    def add_peer(self, peer_id: Hashable) -> None:
        with self._lock:
            if peer_id not in self.peerset:
                self.peerset.append(peer_id)
                logger.info("peerset add new peer %s", peer_id)

    def remove_peer(self, peer_id: Hashable) -> None:
        with self._lock:
            self.peerset = [p for p in self.peerset if p != peer_id]
        logger.info("peerset remove peer %s", peer_id)

    def get_current_height(self) -> int:
        with self._lock:
            return self.current_height

    def update_height(self, new_height: int) -> bool:
        """Raise the current height; return whether it changed."""
        with self._lock:
            if new_height <= self.current_height:
                return False
            old_height, self.current_height = self.current_height, new_height
        logger.info("update block height old_height=%d new_height=%d", old_height, new_height)
        return True

    def add_received_block(self, block_number: int) -> None:
        with self._lock:
            self.received_blocks.add(block_number)

    def is_block_received(self, block_number: int) -> bool:
        with self._lock:
            return block_number in self.received_blocks

    def request_block_by_number(self, block_number: int, network: Network) -> None:
        """Ask the first connected peer for one header, unless already pending."""
        with self._lock:
            if not self.peerset:
                logger.warning("no available peer to request block %d", block_number)
                return
            peer_id = self.peerset[0]
            if block_number in self.pending_requests:
                return
            self.pending_requests.add(block_number)

        request = GetBlockHeaders(
            start_block=block_number,
            limit=1,
            skip=0,
            direction=HeadersDirection.RISING,
        )
        network.send_request(peer_id, request)
        logger.info("request block %d from %s", block_number, peer_id)

    def request_next_block(self, network: Network) -> None:
        self.request_block_by_number(self.get_current_height() + 1, network)

    def check_and_request_missing_blocks(
        self, received_block_number: int, network: Network
    ) -> None:
        """Request up to a few blocks between the current height and a newer block."""
        current_height = self.get_current_height()
        if received_block_number <= current_height + 1:
            return
        logger.info(
            "detect block gap, start request missing blocks current_height=%d "
            "received_block=%d gap=%d",
            current_height,
            received_block_number,
            received_block_number - current_height - 1,
        )
        start = current_height + 1
        end = min(start + _MISSING_BLOCKS_WINDOW, received_block_number)
        for missing_block in range(start, end):
            if not self.is_block_received(missing_block):
                self.request_block_by_number(missing_block, network)

    def process_received_block(self, block_number: int) -> None:
        with self._lock:
            self.pending_requests.discard(block_number)
        self.add_received_block(block_number)
        self.update_height(block_number)

    def process_block_hashes(self, block_numbers: Iterable[int], network: Network) -> None:
        current_height = self.get_current_height()
        for block_number in block_numbers:
            if block_number > current_height and not self.is_block_received(block_number):
                self.request_block_by_number(block_number, network)

    def cleanup_expired_requests(self) -> None:
        """Drop old pending requests once too many have piled up."""
        with self._lock:
            if len(self.pending_requests) <= _MAX_PENDING_REQUESTS:
                return
            threshold = max(self.current_height - _PENDING_KEEP_DEPTH, 0)
            self.pending_requests = {n for n in self.pending_requests if n > threshold}
            remaining = len(self.pending_requests)
        logger.info(
            "cleanup expired block requests, current pending requests: %d", remaining
        )


class EventSink(Protocol):
    def put_nowait(self, item: Any) -> None: ...


class SmartBlockImporter:
    """Turns block announcements from peers into events on a queue."""

    def __init__(self, event_sender: EventSink) -> None:
        self.event_sender = event_sender

    def _send(self, event: NewBlock | NewBlockHashes, what: str) -> None:
        try:
            self.event_sender.put_nowait(event)
        except (asyncio.QueueFull, queue.Full) as exc:
            logger.warning("failed to send %s event: %s", what, exc or "queue full")

    def on_new_block(self, peer_id: Hashable, message: NewBlockMessage) -> None:
        transaction_count = len(message.transactions)
        block_hash = "0x" + message.hash.hex()
        logger.info(
            "receive new block peer_id=%s block_hash=%s block_number=%d parent_hash=0x%s "
            "timestamp=%d gas_limit=%d gas_used=%d transactions_count=%d",
            peer_id,
            block_hash,
            message.number,
            message.parent_hash.hex(),
            message.timestamp,
            message.gas_limit,
            message.gas_used,
            transaction_count,
        )
        self._send(
            NewBlock(
                peer_id=peer_id,
                block_number=message.number,
                block_hash=block_hash,
                transaction_count=transaction_count,
            ),
            "block",
        )
        if transaction_count:
            logger.info(
                "block %d contains transactions count: %d", message.number, transaction_count
            )

    def on_new_block_hashes(
        self, peer_id: Hashable, hashes: Iterable[BlockHashNumber]
    ) -> None:
        hashes = list(hashes)
        logger.info("receive block hashes list peer_id=%s hashes_count=%d", peer_id, len(hashes))
        for item in hashes:
            logger.info(
                "block hash peer_id=%s block_hash=0x%s block_number=%d",
                peer_id,
                item.hash.hex(),
                item.number,
            )
        self._send(
            NewBlockHashes(peer_id=peer_id, block_numbers=[h.number for h in hashes]),
            "block hashes",
        )