import pytest

from bscpeer.peer.upgrade_status import (
    UPGRADE_STATUS_MESSAGE_ID,
    RlpDecodeError,
    UpgradeStatus,
    UpgradeStatusExtension,
)


def _peer_message(extension: UpgradeStatusExtension) -> bytes:
    body = extension.encode()
    return bytes([UPGRADE_STATUS_MESSAGE_ID, 0xC0 + len(body)]) + body


def test_encode_starts_with_message_id():
    encoded = UpgradeStatus().encode()
    assert encoded[0] == 0x0B
    assert encoded[1:] == UpgradeStatusExtension().encode()


def test_extension_encoding_bytes():
    assert UpgradeStatusExtension(False).encode() == b"\xc1\x80"
    assert UpgradeStatusExtension(True).encode() == b"\xc1\x01"


def test_into_rlpx_matches_encode():
    status = UpgradeStatus(UpgradeStatusExtension(True))
    assert status.into_rlpx() == status.encode()


@pytest.mark.parametrize("flag", [False, True])
def test_extension_round_trip(flag):
    ext = UpgradeStatusExtension(flag)
    assert UpgradeStatusExtension.decode(ext.encode()) == ext


@pytest.mark.parametrize("flag", [False, True])
def test_decode_peer_message(flag):
    ext = UpgradeStatusExtension(flag)
    assert UpgradeStatus.decode(_peer_message(ext)) == UpgradeStatus(ext)


def test_decode_ignores_trailing_bytes():
    data = _peer_message(UpgradeStatusExtension(True)) + b"\x00\x01"
    assert UpgradeStatus.decode(data).extension.disable_peer_tx_broadcast is True


def test_decode_rejects_wrong_message_id():
    data = bytes([0x0A]) + _peer_message(UpgradeStatusExtension())[1:]
    with pytest.raises(RlpDecodeError):
        UpgradeStatus.decode(data)


def test_decode_rejects_own_unwrapped_encoding():
    with pytest.raises(RlpDecodeError):
        UpgradeStatus.decode(UpgradeStatus().encode())


def test_decode_rejects_empty_input():
    with pytest.raises(RlpDecodeError):
        UpgradeStatus.decode(b"")


def test_decode_rejects_truncated_input():
    with pytest.raises(RlpDecodeError):
        UpgradeStatus.decode(bytes([UPGRADE_STATUS_MESSAGE_ID]))


def test_extension_rejects_invalid_bool():
    with pytest.raises(RlpDecodeError):
        UpgradeStatusExtension.decode(b"\xc1\x02")


def test_extension_rejects_string():
    with pytest.raises(RlpDecodeError):
        UpgradeStatusExtension.decode(b"\x80")


def test_extension_rejects_extra_list_items():
    with pytest.raises(RlpDecodeError):
        UpgradeStatusExtension.decode(b"\xc2\x80\x80")


def test_rlp_error_is_value_error():
    with pytest.raises(ValueError):
        UpgradeStatusExtension.decode(b"")