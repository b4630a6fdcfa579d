"""The BSC extension of the eth protocol handshake."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar

from bscpeer.peer.upgrade_status import (
    RlpDecodeError,
    UpgradeStatus,
    UpgradeStatusExtension,
)

logger = logging.getLogger(__name__)


class EthVersion(enum.IntEnum):
    """Versions of the eth wire protocol."""

    Eth66 = 66
    Eth67 = 67
    Eth68 = 68
    Eth69 = 69


class DisconnectReason(enum.IntEnum):
    """Reasons given to a peer when closing the connection."""

    DisconnectRequested = 0x00
    TcpSubsystemError = 0x01
    ProtocolBreach = 0x02
    UselessPeer = 0x03
    TooManyPeers = 0x04
    AlreadyConnected = 0x05
    IncompatibleP2PProtocolVersion = 0x06
    NullNodeIdentity = 0x07
    ClientQuitting = 0x08
    UnexpectedHandshakeIdentity = 0x09
    ConnectedToSelf = 0x0A
    PingTimeout = 0x0B
    SubprotocolSpecific = 0x10


class HandshakeError(Exception):
    """The handshake with a peer failed."""


class NoResponseError(HandshakeError):
    """The peer closed the stream without answering."""


class NonStatusMessageError(HandshakeError):
    """The peer answered with something other than a status message."""


class StreamTimeoutError(HandshakeError):
    """The handshake did not finish in time."""


class UnauthStream(Protocol):
    """A connection whose eth handshake is not finished yet."""

    def send(self, message: bytes) -> None: ...

    async def receive(self) -> Optional[bytes]: ...

    async def disconnect(self, reason: DisconnectReason) -> None: ...


StatusT = TypeVar("StatusT")


class BscHandshake:
    """The eth handshake followed by the BSC upgrade status exchange."""

    @staticmethod
    async def upgrade_status(stream: UnauthStream, negotiated_status: StatusT) -> StatusT:
        """Exchange upgrade status messages when the negotiated version is above eth/66."""
        version: Any = getattr(negotiated_status, "version")
        if version <= EthVersion.Eth66:
            return negotiated_status

        ours = UpgradeStatus(UpgradeStatusExtension(disable_peer_tx_broadcast=False))
        stream.send(ours.into_rlpx())

        theirs = await stream.receive()
        if theirs is None:
            await stream.disconnect(DisconnectReason.DisconnectRequested)
            raise NoResponseError("peer sent no upgrade status")

        try:
            UpgradeStatus.decode(theirs)
        except RlpDecodeError as exc:
            logger.debug("Decode error in BSC handshake: msg=%s", theirs.hex())
            await stream.disconnect(DisconnectReason.ProtocolBreach)
            raise NonStatusMessageError("invalid upgrade status message") from exc
        return negotiated_status

    async def handshake(
        self,
        stream: UnauthStream,
        status: StatusT,
        eth_handshake: Callable[[UnauthStream, StatusT], Awaitable[StatusT]],
        timeout: float,
    ) -> StatusT:
        """Run ``eth_handshake`` then the upgrade exchange, within ``timeout`` seconds."""

        async def run() -> StatusT:
            negotiated = await eth_handshake(stream, status)
            return await self.upgrade_status(stream, negotiated)

        try:
            return await asyncio.wait_for(run(), timeout)
        except asyncio.TimeoutError as exc:
            raise StreamTimeoutError("handshake timed out") from exc