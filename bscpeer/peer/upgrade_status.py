"""The upgrade status message exchanged during the BSC handshake."""

from __future__ import annotations

from dataclasses import dataclass, field

UPGRADE_STATUS_MESSAGE_ID = 0x0B


class RlpDecodeError(ValueError):
    """Raised when bytes are not a valid RLP encoding of the expected value."""


def _read_header(data: bytes, pos: int) -> tuple[bool, int, int]:
    """Return (is_list, payload_start, payload_length) of the item at ``pos``."""
    if pos >= len(data):
        raise RlpDecodeError("input too short")
    prefix = data[pos]
    if prefix < 0x80:
        return False, pos, 1
    if prefix <= 0xB7:
        length = prefix - 0x80
        start = pos + 1
        if length == 1:
            if start >= len(data):
                raise RlpDecodeError("input too short")
            if data[start] < 0x80:
                raise RlpDecodeError("non-canonical single byte")
        is_list = False
    elif prefix <= 0xBF:
        is_list, start, length = False, *_read_long_length(data, pos, prefix - 0xB7)
    elif prefix <= 0xF7:
        is_list, start, length = True, pos + 1, prefix - 0xC0
    else:
        is_list, start, length = True, *_read_long_length(data, pos, prefix - 0xF7)
    if start + length > len(data):
        raise RlpDecodeError("input too short")
    return is_list, start, length


def _read_long_length(data: bytes, pos: int, size: int) -> tuple[int, int]:
    start = pos + 1
    raw = data[start : start + size]
    if len(raw) < size:
        raise RlpDecodeError("input too short")
    if raw[0] == 0:
        raise RlpDecodeError("leading zero in length")
    length = int.from_bytes(raw, "big")
    if length < 56:
        raise RlpDecodeError("non-canonical size")
    return start + size, length


def _read_u8(data: bytes, pos: int) -> tuple[int, int]:
    is_list, start, length = _read_header(data, pos)
    if is_list:
        raise RlpDecodeError("unexpected list")
    payload = data[start : start + length]
    if len(payload) > 1:
        raise RlpDecodeError("integer overflow")
    if payload and payload[0] == 0:
        raise RlpDecodeError("leading zero")
    return (payload[0] if payload else 0), start + length


def _read_bool(data: bytes, pos: int) -> tuple[bool, int]:
    value, end = _read_u8(data, pos)
    if value not in (0, 1):
        raise RlpDecodeError("invalid bool value, must be 0 or 1")
    return value == 1, end


def _encode_u8(value: int) -> bytes:
    if value == 0:
        return b"\x80"
    if value < 0x80:
        return bytes([value])
    return bytes([0x81, value])


@dataclass(frozen=True)
class UpgradeStatusExtension:
    """Whether the peer should stop broadcasting transactions to us."""

    disable_peer_tx_broadcast: bool = False

    def encode(self) -> bytes:
        """RLP-encode the extension as a one-element list."""
        payload = _encode_u8(int(self.disable_peer_tx_broadcast))
        return bytes([0xC0 + len(payload)]) + payload

    @classmethod
    def decode(cls, data: bytes) -> UpgradeStatusExtension:
        """Decode an extension from the start of ``data``."""
        extension, _ = cls._decode_at(data, 0)
        return extension

    @classmethod
    def _decode_at(cls, data: bytes, pos: int) -> tuple[UpgradeStatusExtension, int]:
        is_list, start, length = _read_header(data, pos)
        if not is_list:
            raise RlpDecodeError("unexpected string")
        flag, end = _read_bool(data, start)
        if end != start + length:
            raise RlpDecodeError("list length mismatch")
        return cls(disable_peer_tx_broadcast=flag), end


@dataclass(frozen=True)
class UpgradeStatus:
    """The BSC upgrade status packet sent right after the eth status exchange."""

    extension: UpgradeStatusExtension = field(default_factory=UpgradeStatusExtension)

    def encode(self) -> bytes:
        """The message id followed by the encoded extension."""
        return _encode_u8(UPGRADE_STATUS_MESSAGE_ID) + self.extension.encode()

    @classmethod
    def decode(cls, data: bytes) -> UpgradeStatus:
        """Decode a peer's message: id, a wrapping list header, then the extension."""
        message_id, pos = _read_u8(data, 0)
        if message_id != UPGRADE_STATUS_MESSAGE_ID:
            raise RlpDecodeError("Invalid message ID")
        if pos >= len(data):
            raise RlpDecodeError("input too short")
        extension, _ = UpgradeStatusExtension._decode_at(data, pos + 1)
        return cls(extension=extension)

    def into_rlpx(self) -> bytes:
        """The bytes to send over RLPx."""
        return self.encode()