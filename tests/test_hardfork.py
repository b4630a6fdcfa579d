import pytest

from bscpeer.chain_config.hardfork import (
    BscHardfork,
    Chain,
    EthereumHardfork,
    ForkCondition,
    SpecId,
    bsc_mainnet_hardforks,
    bsc_testnet_hardforks,
)

SCHEDULES = [
    (Chain.bsc_mainnet(), bsc_mainnet_hardforks),
    (Chain.bsc_testnet(), bsc_testnet_hardforks),
]


def test_mainnet_known_activation_points():
    fork = BscHardfork.Maxwell
    assert fork.activation_block(EthereumHardfork.Berlin, Chain.bsc_mainnet()) == 31302048
    assert fork.activation_block(BscHardfork.HertzFix, Chain.bsc_mainnet()) == 34140700
    assert fork.activation_timestamp(BscHardfork.Haber, Chain.bsc_mainnet()) == 1718863500


def test_testnet_known_activation_points():
    fork = BscHardfork.Maxwell
    assert fork.activation_block(BscHardfork.Ramanujan, Chain.bsc_testnet()) == 1010000
    assert fork.activation_timestamp(BscHardfork.HaberFix, Chain.bsc_testnet()) == 1719986788
    assert fork.activation_timestamp(EthereumHardfork.Cancun, Chain.bsc_testnet()) == 1713330442


@pytest.mark.parametrize("chain, schedule", SCHEDULES)
def test_lookups_agree_with_schedule(chain, schedule):
    for fork, condition in schedule():
        block = BscHardfork.Frontier.activation_block(fork, chain)
        timestamp = BscHardfork.Frontier.activation_timestamp(fork, chain)
        if condition.is_block:
            assert timestamp is None
            if block is not None:
                assert block == condition.value
        else:
            assert block is None
            if timestamp is not None:
                assert timestamp == condition.value


def test_schedule_is_ordered():
    for schedule in (bsc_mainnet_hardforks(), bsc_testnet_hardforks()):
        conditions = [condition for _, condition in schedule]
        kinds = [c.is_block for c in conditions]
        assert kinds == sorted(kinds, reverse=True)
        blocks = [c.value for c in conditions if c.is_block]
        timestamps = [c.value for c in conditions if c.is_timestamp]
        assert blocks == sorted(blocks)
        assert timestamps == sorted(timestamps)


def test_schedule_contains_every_bsc_fork_once():
    for schedule in (bsc_mainnet_hardforks(), bsc_testnet_hardforks()):
        forks = [fork for fork, _ in schedule]
        assert len(forks) == len(set(forks))
        bsc_forks = {f for f in forks if isinstance(f, BscHardfork)}
        assert bsc_forks == set(BscHardfork) - {BscHardfork.Frontier}


def test_schedules_end_with_maxwell():
    assert bsc_mainnet_hardforks()[-1] == (BscHardfork.Maxwell, ForkCondition.timestamp(1751250600))
    assert bsc_testnet_hardforks()[-1] == (BscHardfork.Maxwell, ForkCondition.timestamp(1748243100))


def test_unknown_chain_has_no_activation():
    other = Chain(1)
    assert BscHardfork.Maxwell.activation_block(BscHardfork.Bruno, other) is None
    assert BscHardfork.Maxwell.activation_timestamp(BscHardfork.Kepler, other) is None


def test_unlisted_forks_have_no_activation():
    assert BscHardfork.bsc_mainnet_activation_block(EthereumHardfork.Prague) is None
    assert BscHardfork.bsc_mainnet_activation_block(BscHardfork.Maxwell) is None
    assert BscHardfork.bsc_mainnet_activation_timestamp(BscHardfork.Bohr) is None
    assert BscHardfork.bsc_testnet_activation_timestamp(EthereumHardfork.Berlin) is None
    assert BscHardfork.bsc_testnet_activation_block("Berlin") is None


def test_fork_condition_active_at():
    by_block = ForkCondition.block(31302048)
    by_time = ForkCondition.timestamp(1705996800)
    assert by_block.active_at(31302048, 0)
    assert not by_block.active_at(31302047, 1705996800)
    assert by_time.active_at(0, 1705996800)
    assert not by_time.active_at(31302048, 1705996799)


@pytest.mark.parametrize(
    "fork, spec",
    [
        (BscHardfork.Frontier, SpecId.MUIR_GLACIER),
        (BscHardfork.Plato, SpecId.MUIR_GLACIER),
        (BscHardfork.Hertz, SpecId.LONDON),
        (BscHardfork.HertzFix, SpecId.LONDON),
        (BscHardfork.FeynmanFix, SpecId.SHANGHAI),
        (BscHardfork.Haber, SpecId.CANCUN),
        (BscHardfork.Maxwell, SpecId.CANCUN),
    ],
)
def test_spec_id(fork, spec):
    assert fork.spec_id() is spec


def test_spec_id_never_decreases_along_mainnet_schedule():
    specs = [f.spec_id() for f, _ in bsc_mainnet_hardforks() if isinstance(f, BscHardfork)]
    assert specs == sorted(specs)


def test_hardfork_lookup_by_name():
    assert BscHardfork("Lorentz") is BscHardfork.Lorentz
    with pytest.raises(ValueError):
        BscHardfork("Unknown")