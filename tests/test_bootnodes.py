import ipaddress

import pytest

from bscpeer.chain_config.bootnodes import (
    BSC_MAINNET_BOOTNODES,
    BSC_TESTNET_BOOTNODES,
    NodeRecord,
    bsc_mainnet_nodes,
    bsc_testnet_nodes,
)

NODE_ID_HEX = "ab" * 64


def test_bsc_mainnet_nodes():
    nodes = bsc_mainnet_nodes()
    assert nodes
    assert len(nodes) == 6


def test_bsc_testnet_nodes():
    nodes = bsc_testnet_nodes()
    assert nodes
    assert len(nodes) == 4


def test_first_mainnet_node_fields():
    node = bsc_mainnet_nodes()[0]
    assert node.address == ipaddress.ip_address("52.69.102.73")
    assert node.tcp_port == 30311
    assert node.udp_port == 30311
    assert node.id.hex().startswith("433c8bfdf53a3e22")


@pytest.mark.parametrize("text", BSC_MAINNET_BOOTNODES + BSC_TESTNET_BOOTNODES)
def test_bootnode_string_round_trip(text):
    node = NodeRecord.parse(text)
    assert str(node) == text
    assert NodeRecord.parse(str(node)) == node


def test_parse_discport():
    node = NodeRecord.parse(f"enode://{NODE_ID_HEX}@10.0.0.1:30303?discport=30301")
    assert node.tcp_port == 30303
    assert node.udp_port == 30301
    assert NodeRecord.parse(str(node)) == node


def test_parse_ipv6():
    node = NodeRecord.parse(f"enode://{NODE_ID_HEX}@[::1]:30303")
    assert node.address == ipaddress.ip_address("::1")
    assert NodeRecord.parse(str(node)) == node


@pytest.mark.parametrize(
    "text",
    [
        f"http://{NODE_ID_HEX}@10.0.0.1:30303",
        "enode://abcd@10.0.0.1:30303",
        f"enode://{'zz' * 64}@10.0.0.1:30303",
        f"enode://{NODE_ID_HEX}@10.0.0.1",
        f"enode://{NODE_ID_HEX}@example.com:30303",
        f"enode://{NODE_ID_HEX}@10.0.0.1:30303?discport=abc",
        "enode://10.0.0.1:30303",
    ],
)
def test_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        NodeRecord.parse(text)