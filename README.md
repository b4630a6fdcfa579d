# bscpeer

Building blocks for a BNB Smart Chain (BSC) peer, in plain Python with no
third-party dependencies:

- `bscpeer.chain_config.bootnodes`: the mainnet and testnet boot nodes and a
  parser for `enode://` records.
- `bscpeer.chain_config.hardfork`: Ethereum and BSC hardforks, their
  activation blocks and timestamps, and the full schedule of each network.
- `bscpeer.chain_config.spec`: chain specifications, head blocks and fork
  identifiers (EIP-2124).
- `bscpeer.peer.upgrade_status`: the BSC `UpgradeStatus` message and its RLP
  encoding.
- `bscpeer.peer.handshake`: the upgrade status exchange that follows the eth
  status handshake.
- `bscpeer.peer.blockstate`: a tracker for connected peers, chain height,
  pending header requests and received blocks, and an importer that turns
  block announcements into events.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

### Boot nodes

```python
from bscpeer.chain_config.bootnodes import NodeRecord, bsc_mainnet_nodes, bsc_testnet_nodes

nodes = bsc_mainnet_nodes()      # 6 NodeRecord objects
testnet = bsc_testnet_nodes()    # 4 NodeRecord objects
```

`NodeRecord.parse(text)` reads one `enode://<id>@<ip>:<port>[?discport=<port>]`
string into a record with `address`, `tcp_port`, `udp_port` and `id` (64 bytes);
`str(record)` writes it back. Malformed records raise `ValueError`. The raw
strings are in `BSC_MAINNET_BOOTNODES` and `BSC_TESTNET_BOOTNODES`.

### Hardforks

```python
from bscpeer.chain_config.hardfork import BscHardfork, Chain, EthereumHardfork, SpecId

BscHardfork.bsc_mainnet_activation_block(BscHardfork.Hertz)            # 31302048
BscHardfork.bsc_mainnet_activation_timestamp(EthereumHardfork.Cancun)  # 1718863500
BscHardfork.Maxwell.activation_block(BscHardfork.Niels, Chain.bsc_testnet())  # 1014369
BscHardfork.Haber.spec_id()                                            # SpecId.CANCUN
```

The lookups return `None` for a fork that does not activate that way on that
network, and `activation_block` / `activation_timestamp` return `None` for a
chain other than `Chain.bsc_mainnet()` (id 56) or `Chain.bsc_testnet()` (id 97).

`bsc_mainnet_hardforks()` and `bsc_testnet_hardforks()` return the ordered
schedule as a tuple of `(fork, ForkCondition)` pairs. A `ForkCondition` is made
with `ForkCondition.block(n)` or `ForkCondition.timestamp(t)` and answers
`active_at(block_number, timestamp)`.

### Chain specs and fork ids

```python
from bscpeer.chain_config.spec import bsc_mainnet, bsc_mainnet_head, bsc_testnet, bsc_testnet_head

fork_id = bsc_mainnet().fork_id(bsc_mainnet_head())
fork_id.hash   # 4-byte CRC32 checksum
fork_id.next   # next scheduled fork block or timestamp, 0 if none
```

`ChainSpec` holds the chain, genesis hash and hardfork schedule; `Head`
describes a chain head (number, hash, difficulty, total difficulty, timestamp).

### Upgrade status message

```python
from bscpeer.peer.upgrade_status import UpgradeStatus, UpgradeStatusExtension

message = UpgradeStatus(UpgradeStatusExtension(disable_peer_tx_broadcast=False))
payload = message.into_rlpx()   # message id 0x0b followed by the RLP extension
```

`UpgradeStatus.decode(data)` reads a message as peers send it: the message id,
a wrapping list header, then the extension. `UpgradeStatusExtension` has its
own `encode()` and `decode(data)`. Malformed input, or a message id other than
`0x0b`, raises `RlpDecodeError` (a `ValueError`).

### Handshake

`BscHandshake().handshake(stream, status, eth_handshake, timeout)` is a
coroutine. It awaits `eth_handshake(stream, status)` for the negotiated status
and then, if that status's `version` is above `EthVersion.Eth66`, sends our
`UpgradeStatus` and waits for the peer's, all within `timeout` seconds.

The stream needs `send(bytes)`, `async receive()` returning bytes or `None`
when closed, and `async disconnect(reason)` taking a `DisconnectReason`.
Failures raise a `HandshakeError`:

- `NoResponseError`: the peer closed the stream (we disconnect with
  `DisconnectRequested` first);
- `NonStatusMessageError`: the reply did not decode (we disconnect with
  `ProtocolBreach` first);
- `StreamTimeoutError`: the timeout passed.

`BscHandshake.upgrade_status(stream, negotiated_status)` runs the upgrade
exchange alone.

### Block state

```python
from bscpeer.peer.blockstate import BlockStateManager

state = BlockStateManager(0)
state.add_peer(peer_id)
state.request_next_block(network)   # sends GetBlockHeaders for block 1 to the first peer
state.process_received_block(1)     # height becomes 1
```

`network` is any object with a `send_request(peer_id, request)` method; it
receives `GetBlockHeaders` requests (one header, rising). A block already
pending is not requested twice, and with no peers nothing is sent. Other
methods: `check_and_request_missing_blocks` (requests at most 5 blocks after
the current height), `process_block_hashes`, and `cleanup_expired_requests`
(once more than 100 requests are pending, drops those 50 or more blocks below
the current height). The manager is safe to use from several threads.

`SmartBlockImporter(queue)` turns announcements into events put on the queue
with `put_nowait` (an `asyncio.Queue` or `queue.Queue`):
`on_new_block(peer_id, NewBlockMessage(...))` puts a `NewBlock` event, and
`on_new_block_hashes(peer_id, [BlockHashNumber(...), ...])` puts a
`NewBlockHashes` event. A full queue is logged and the event dropped.

## What this package does not do

There is no networking layer and no command to run: it does not discover
peers, open RLPx connections, perform the eth status exchange itself or send
requests on the wire. Those are supplied by the caller through the `stream`,
`eth_handshake` and `network` objects described above. The chain specs carry
only the genesis hash and hardfork schedule, not the genesis state.