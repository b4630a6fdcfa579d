"""Hardforks of the BSC networks and their activation points."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional


class EthereumHardfork(enum.Enum):
    """Ethereum hardforks that BSC schedules alongside its own."""

    Frontier = "Frontier"
    Homestead = "Homestead"
    Dao = "Dao"
    Tangerine = "Tangerine"
    SpuriousDragon = "SpuriousDragon"
    Byzantium = "Byzantium"
    Constantinople = "Constantinople"
    Petersburg = "Petersburg"
    Istanbul = "Istanbul"
    MuirGlacier = "MuirGlacier"
    Berlin = "Berlin"
    London = "London"
    ArrowGlacier = "ArrowGlacier"
    GrayGlacier = "GrayGlacier"
    Paris = "Paris"
    Shanghai = "Shanghai"
    Cancun = "Cancun"
    Prague = "Prague"
    Osaka = "Osaka"


class SpecId(enum.IntEnum):
    """EVM specification levels, in order of introduction."""

    FRONTIER = enum.auto()
    HOMESTEAD = enum.auto()
    TANGERINE = enum.auto()
    SPURIOUS_DRAGON = enum.auto()
    BYZANTIUM = enum.auto()
    CONSTANTINOPLE = enum.auto()
    PETERSBURG = enum.auto()
    ISTANBUL = enum.auto()
    MUIR_GLACIER = enum.auto()
    BERLIN = enum.auto()
    LONDON = enum.auto()
    ARROW_GLACIER = enum.auto()
    GRAY_GLACIER = enum.auto()
    MERGE = enum.auto()
    SHANGHAI = enum.auto()
    CANCUN = enum.auto()
    PRAGUE = enum.auto()
    OSAKA = enum.auto()


@dataclass(frozen=True)
class Chain:
    """A chain identified by its numeric chain id."""

    id: int

    @classmethod
    def bsc_mainnet(cls) -> Chain:
        return cls(56)

    @classmethod
    def bsc_testnet(cls) -> Chain:
        return cls(97)


class ForkConditionKind(enum.Enum):
    BLOCK = "block"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class ForkCondition:
    """Activation of a fork at a block number or at a timestamp."""

    kind: ForkConditionKind
    value: int

    @classmethod
    def block(cls, number: int) -> ForkCondition:
        return cls(ForkConditionKind.BLOCK, number)

    @classmethod
    def timestamp(cls, seconds: int) -> ForkCondition:
        return cls(ForkConditionKind.TIMESTAMP, seconds)

    @property
    def is_block(self) -> bool:
        return self.kind is ForkConditionKind.BLOCK

    @property
    def is_timestamp(self) -> bool:
        return self.kind is ForkConditionKind.TIMESTAMP

    def active_at(self, block_number: int, timestamp: int) -> bool:
        """Whether the fork is active at the given block and time."""
        if self.is_block:
            return block_number >= self.value
        return timestamp >= self.value


_EthLookup = Callable[[EthereumHardfork], Optional[int]]
_BscLookup = Callable[["BscHardfork"], Optional[int]]


def _match_hardfork(fork: object, eth_lookup: _EthLookup, bsc_lookup: _BscLookup) -> Optional[int]:
    if isinstance(fork, EthereumHardfork):
        return eth_lookup(fork)
    if isinstance(fork, BscHardfork):
        return bsc_lookup(fork)
    return None


_E = EthereumHardfork

_GENESIS_ETH_FORKS = (
    _E.Frontier,
    _E.Homestead,
    _E.Tangerine,
    _E.SpuriousDragon,
    _E.Byzantium,
    _E.Constantinople,
    _E.Petersburg,
    _E.Istanbul,
    _E.MuirGlacier,
)


class BscHardfork(enum.Enum):
    """The name of a BSC hardfork; the latest, Maxwell, is the default."""

    Frontier = "Frontier"
    Ramanujan = "Ramanujan"
    Niels = "Niels"
    MirrorSync = "MirrorSync"
    Bruno = "Bruno"
    Euler = "Euler"
    Nano = "Nano"
    Moran = "Moran"
    Gibbs = "Gibbs"
    Planck = "Planck"
    Luban = "Luban"
    Plato = "Plato"
    Hertz = "Hertz"
    HertzFix = "HertzFix"
    Kepler = "Kepler"
    Feynman = "Feynman"
    FeynmanFix = "FeynmanFix"
    Haber = "Haber"
    HaberFix = "HaberFix"
    Bohr = "Bohr"
    Pascal = "Pascal"
    Lorentz = "Lorentz"
    Maxwell = "Maxwell"

    def activation_block(self, fork: object, chain: Chain) -> Optional[int]:
        """Activation block of ``fork`` on ``chain``, if it activates by block."""
        if chain == Chain.bsc_mainnet():
            return BscHardfork.bsc_mainnet_activation_block(fork)
        if chain == Chain.bsc_testnet():
            return BscHardfork.bsc_testnet_activation_block(fork)
        return None

    def activation_timestamp(self, fork: object, chain: Chain) -> Optional[int]:
        """Activation timestamp of ``fork`` on ``chain``, if it activates by time."""
        if chain == Chain.bsc_mainnet():
            return BscHardfork.bsc_mainnet_activation_timestamp(fork)
        if chain == Chain.bsc_testnet():
            return BscHardfork.bsc_testnet_activation_timestamp(fork)
        return None

    @staticmethod
    def bsc_mainnet_activation_block(fork: object) -> Optional[int]:
        eth = {f: 0 for f in _GENESIS_ETH_FORKS}
        eth.update({_E.Berlin: 31302048, _E.London: 31302048})
        bsc = {
            BscHardfork.Ramanujan: 0,
            BscHardfork.Niels: 0,
            BscHardfork.MirrorSync: 5184000,
            BscHardfork.Bruno: 13082000,
            BscHardfork.Euler: 18907621,
            BscHardfork.Nano: 21962149,
            BscHardfork.Moran: 22107423,
            BscHardfork.Gibbs: 23846001,
            BscHardfork.Planck: 27281024,
            BscHardfork.Luban: 29020050,
            BscHardfork.Plato: 30720096,
            BscHardfork.Hertz: 31302048,
            BscHardfork.HertzFix: 34140700,
        }
        return _match_hardfork(fork, eth.get, bsc.get)

    @staticmethod
    def bsc_testnet_activation_block(fork: object) -> Optional[int]:
        eth = {f: 0 for f in _GENESIS_ETH_FORKS}
        eth.update({_E.Berlin: 31103030, _E.London: 31103030})
        bsc = {
            BscHardfork.Ramanujan: 1010000,
            BscHardfork.Niels: 1014369,
            BscHardfork.MirrorSync: 5582500,
            BscHardfork.Bruno: 13837000,
            BscHardfork.Euler: 19203503,
            BscHardfork.Gibbs: 22800220,
            BscHardfork.Nano: 23482428,
            BscHardfork.Moran: 23603940,
            BscHardfork.Planck: 28196022,
            BscHardfork.Luban: 29295050,
            BscHardfork.Plato: 29861024,
            BscHardfork.Hertz: 31103030,
            BscHardfork.HertzFix: 35682300,
        }
        return _match_hardfork(fork, eth.get, bsc.get)

    @staticmethod
    def bsc_mainnet_activation_timestamp(fork: object) -> Optional[int]:
        eth = {_E.Shanghai: 1705996800, _E.Cancun: 1718863500}
        bsc = {
            BscHardfork.Kepler: 1705996800,
            BscHardfork.Feynman: 1713419340,
            BscHardfork.FeynmanFix: 1713419340,
            BscHardfork.Haber: 1718863500,
        }
        return _match_hardfork(fork, eth.get, bsc.get)

    @staticmethod
    def bsc_testnet_activation_timestamp(fork: object) -> Optional[int]:
        eth = {_E.Shanghai: 1702972800, _E.Cancun: 1713330442}
        bsc = {
            BscHardfork.Kepler: 1702972800,
            BscHardfork.Feynman: 1710136800,
            BscHardfork.FeynmanFix: 1711342800,
            BscHardfork.Haber: 1716962820,
            BscHardfork.HaberFix: 1719986788,
        }
        return _match_hardfork(fork, eth.get, bsc.get)

    def spec_id(self) -> SpecId:
        """The EVM specification this hardfork runs under."""
        return _SPEC_IDS[self]


_SPEC_IDS = {
    **{
        fork: SpecId.MUIR_GLACIER
        for fork in (
            BscHardfork.Frontier,
            BscHardfork.Ramanujan,
            BscHardfork.Niels,
            BscHardfork.MirrorSync,
            BscHardfork.Bruno,
            BscHardfork.Euler,
            BscHardfork.Gibbs,
            BscHardfork.Nano,
            BscHardfork.Moran,
            BscHardfork.Planck,
            BscHardfork.Luban,
            BscHardfork.Plato,
        )
    },
    BscHardfork.Hertz: SpecId.LONDON,
    BscHardfork.HertzFix: SpecId.LONDON,
    BscHardfork.Kepler: SpecId.SHANGHAI,
    BscHardfork.Feynman: SpecId.SHANGHAI,
    BscHardfork.FeynmanFix: SpecId.SHANGHAI,
    **{
        fork: SpecId.CANCUN
        for fork in (
            BscHardfork.Haber,
            BscHardfork.HaberFix,
            BscHardfork.Bohr,
            BscHardfork.Pascal,
            BscHardfork.Lorentz,
            BscHardfork.Maxwell,
        )
    },
}

Hardfork = "EthereumHardfork | BscHardfork"
ChainHardforks = tuple[tuple[object, ForkCondition], ...]

_B = BscHardfork
_block = ForkCondition.block
_ts = ForkCondition.timestamp


def bsc_mainnet_hardforks() -> ChainHardforks:
    """The ordered hardfork schedule of BSC mainnet."""
    return (
        *((fork, _block(0)) for fork in _GENESIS_ETH_FORKS),
        (_B.Ramanujan, _block(0)),
        (_B.Niels, _block(0)),
        (_B.MirrorSync, _block(5184000)),
        (_B.Bruno, _block(13082000)),
        (_B.Euler, _block(18907621)),
        (_B.Nano, _block(21962149)),
        (_B.Moran, _block(22107423)),
        (_B.Gibbs, _block(23846001)),
        (_B.Planck, _block(27281024)),
        (_B.Luban, _block(29020050)),
        (_B.Plato, _block(30720096)),
        (_E.Berlin, _block(31302048)),
        (_E.London, _block(31302048)),
        (_B.Hertz, _block(31302048)),
        (_B.HertzFix, _block(34140700)),
        (_E.Shanghai, _ts(1705996800)),  # 2024-01-23 08:00:00 UTC
        (_B.Kepler, _ts(1705996800)),
        (_B.Feynman, _ts(1713419340)),  # 2024-04-18 05:49:00 UTC
        (_B.FeynmanFix, _ts(1713419340)),
        (_E.Cancun, _ts(1718863500)),  # 2024-06-20 06:05:00 UTC
        (_B.Haber, _ts(1718863500)),
        (_B.HaberFix, _ts(1727316120)),  # 2024-09-26 02:02:00 UTC
        (_B.Bohr, _ts(1727317200)),  # 2024-09-26 02:20:00 UTC
        (_E.Prague, _ts(1742436600)),  # 2025-03-20 02:10:00 UTC
        (_B.Pascal, _ts(1742436600)),
        (_B.Lorentz, _ts(1745903100)),  # 2025-04-29 05:05:00 UTC
        (_B.Maxwell, _ts(1751250600)),  # 2025-06-30 02:30:00 UTC
    )


def bsc_testnet_hardforks() -> ChainHardforks:
    """The ordered hardfork schedule of BSC testnet."""
    return (
        *((fork, _block(0)) for fork in _GENESIS_ETH_FORKS),
        (_B.Ramanujan, _block(1010000)),
        (_B.Niels, _block(1014369)),
        (_B.MirrorSync, _block(5582500)),
        (_B.Bruno, _block(13837000)),
        (_B.Euler, _block(19203503)),
        (_B.Gibbs, _block(22800220)),
        (_B.Nano, _block(23482428)),
        (_B.Moran, _block(23603940)),
        (_B.Planck, _block(28196022)),
        (_B.Luban, _block(29295050)),
        (_B.Plato, _block(29861024)),
        (_E.Berlin, _block(31103030)),
        (_E.London, _block(31103030)),
        (_B.Hertz, _block(31103030)),
        (_B.HertzFix, _block(35682300)),
        (_E.Shanghai, _ts(1702972800)),
        (_B.Kepler, _ts(1702972800)),
        (_B.Feynman, _ts(1710136800)),
        (_B.FeynmanFix, _ts(1711342800)),
        (_E.Cancun, _ts(1713330442)),
        (_B.Haber, _ts(1716962820)),
        (_B.HaberFix, _ts(1719986788)),
        (_B.Bohr, _ts(1724116996)),
        (_E.Prague, _ts(1740452880)),
        (_B.Pascal, _ts(1740452880)),
        (_B.Lorentz, _ts(1744097580)),
        (_B.Maxwell, _ts(1748243100)),
    )