"""
Oracle Adapter Integration Tests
Owner-only setters, locking and manual-value precedence, with live
Chainlink feeds from the forked chain as sources

Run: python -m pytest tests/integration/test_oracle_adapter.py -v
"""

import pytest
from web3.exceptions import ContractLogicError

from deployment.constants import DAI_ADDRESS, USDC_ADDRESS, get_aggregator_address
from deployment.devchain import increase_time, mine_block
from deployment.transactions import transact
from deployment.units import ANOTHER_FAKE_ADDRESS, FAKE_ADDRESS, token_amount

pytestmark = pytest.mark.integration

STALE_PERIOD = 86400
NOT_OWNER = "Ownable: caller is not the owner"


@pytest.fixture(scope="module")
def feeds():
    return {
        "tvl": get_aggregator_address("ETH-USD", "MAINNET"),
        "DAI": get_aggregator_address("DAI-ETH", "MAINNET"),
        "USDC": get_aggregator_address("USDC-ETH", "MAINNET"),
        "spare": get_aggregator_address("USDT-ETH", "MAINNET"),
    }


@pytest.fixture(scope="module")
def registry(contract_deployer):
    # any contract will do, the adapter only stores it
    return contract_deployer.deploy("ProxyAdmin").address


@pytest.fixture(scope="module")
def adapter(contract_deployer, registry, feeds):
    deployed = contract_deployer.deploy(
        "OracleAdapter",
        registry,
        feeds["tvl"],
        [DAI_ADDRESS, USDC_ADDRESS],
        [feeds["DAI"], feeds["USDC"]],
        STALE_PERIOD,
    )
    return deployed.contract


def owner_tx(fork_ctx, owner, call):
    return transact(fork_ctx, call, owner)


# =============================================================================
# TEST: Constructor and defaults
# =============================================================================

class TestConstructor:

    def test_non_contract_source_rejected(self, contract_deployer, registry, feeds):
        with pytest.raises(ContractLogicError, match="INVALID_SOURCE"):
            contract_deployer.deploy(
                "OracleAdapter", registry, feeds["tvl"],
                [DAI_ADDRESS, USDC_ADDRESS], [FAKE_ADDRESS, feeds["USDC"]], 100,
            )

    def test_zero_stale_period_rejected(self, contract_deployer, registry, feeds):
        with pytest.raises(ContractLogicError, match="INVALID_STALE_PERIOD"):
            contract_deployer.deploy("OracleAdapter", registry, feeds["tvl"], [], [], 0)


class TestDefaults:

    def test_owner_is_deployer(self, adapter, owner):
        assert adapter.functions.owner().call() == owner

    def test_sources(self, adapter, feeds):
        assert adapter.functions.getTvlSource().call() == feeds["tvl"]
        assert adapter.functions.getAssetSource(DAI_ADDRESS).call() == feeds["DAI"]
        assert adapter.functions.getAssetSource(USDC_ADDRESS).call() == feeds["USDC"]

    def test_stale_period(self, adapter):
        assert adapter.functions.getChainlinkStalePeriod().call() == STALE_PERIOD


# =============================================================================
# TEST: Owner-only setters
# =============================================================================

class TestSetters:

    def test_tvl_source_must_be_contract(self, fork_ctx, adapter, owner):
        with pytest.raises(ContractLogicError, match="INVALID_SOURCE"):
            owner_tx(fork_ctx, owner, adapter.functions.setTvlSource(FAKE_ADDRESS))

    def test_owner_sets_tvl_source(self, fork_ctx, adapter, owner, feeds):
        owner_tx(fork_ctx, owner, adapter.functions.setTvlSource(feeds["spare"]))

        assert adapter.functions.getTvlSource().call() == feeds["spare"]

    def test_non_owner_cannot_set_tvl_source(self, fork_ctx, adapter, random_user, feeds):
        with pytest.raises(ContractLogicError):
            transact(fork_ctx, adapter.functions.setTvlSource(feeds["spare"]), random_user)

    def test_asset_source_must_be_contract(self, fork_ctx, adapter, owner):
        with pytest.raises(ContractLogicError, match="INVALID_SOURCE"):
            owner_tx(fork_ctx, owner, adapter.functions.setAssetSources([FAKE_ADDRESS], [ANOTHER_FAKE_ADDRESS]))

    def test_owner_sets_asset_sources(self, fork_ctx, adapter, owner, feeds):
        owner_tx(fork_ctx, owner, adapter.functions.setAssetSources([FAKE_ADDRESS], [feeds["spare"]]))

        assert adapter.functions.getAssetSource(FAKE_ADDRESS).call() == feeds["spare"]

    def test_non_owner_cannot_set_asset_sources(self, fork_ctx, adapter, random_user, feeds):
        with pytest.raises(ContractLogicError, match=NOT_OWNER):
            transact(fork_ctx, adapter.functions.setAssetSources([FAKE_ADDRESS], [feeds["spare"]]), random_user)

    def test_stale_period_cannot_be_zero(self, fork_ctx, adapter, owner):
        with pytest.raises(ContractLogicError, match="INVALID_STALE_PERIOD"):
            owner_tx(fork_ctx, owner, adapter.functions.setChainlinkStalePeriod(0))

    def test_owner_sets_stale_period(self, fork_ctx, adapter, owner):
        owner_tx(fork_ctx, owner, adapter.functions.setChainlinkStalePeriod(100))

        assert adapter.functions.getChainlinkStalePeriod().call() == 100

    def test_non_owner_cannot_set_stale_period(self, fork_ctx, adapter, random_user):
        with pytest.raises(ContractLogicError, match=NOT_OWNER):
            transact(fork_ctx, adapter.functions.setChainlinkStalePeriod(14400), random_user)


# =============================================================================
# TEST: Locking and manual values
# =============================================================================

class TestLock:

    def test_lock_and_unlock(self, fork_ctx, adapter, owner):
        owner_tx(fork_ctx, owner, adapter.functions.setLock(1))
        assert adapter.functions.isLocked().call() is True

        owner_tx(fork_ctx, owner, adapter.functions.setLock(0))
        assert adapter.functions.isLocked().call() is False

    def test_non_owner_cannot_lock(self, fork_ctx, adapter, random_user):
        with pytest.raises(ContractLogicError, match=NOT_OWNER):
            transact(fork_ctx, adapter.functions.setLock(0), random_user)

    def test_manual_values_need_lock(self, fork_ctx, adapter, owner):
        owner_tx(fork_ctx, owner, adapter.functions.setLock(0))

        with pytest.raises(ContractLogicError, match="ORACLE_UNLOCKED"):
            owner_tx(fork_ctx, owner, adapter.functions.setTvl(1, 5))
        with pytest.raises(ContractLogicError, match="ORACLE_UNLOCKED"):
            owner_tx(fork_ctx, owner, adapter.functions.setAssetValue(DAI_ADDRESS, 1, 5))

    def test_owner_sets_manual_values_while_locked(self, fork_ctx, adapter, owner):
        owner_tx(fork_ctx, owner, adapter.functions.setLock(2))

        owner_tx(fork_ctx, owner, adapter.functions.setTvl(1, 5))
        owner_tx(fork_ctx, owner, adapter.functions.setAssetValue(DAI_ADDRESS, 1, 5))

    def test_non_owner_cannot_set_manual_values(self, fork_ctx, adapter, owner, random_user):
        owner_tx(fork_ctx, owner, adapter.functions.setLock(2))

        with pytest.raises(ContractLogicError, match=NOT_OWNER):
            transact(fork_ctx, adapter.functions.setTvl(1, 5), random_user)
        with pytest.raises(ContractLogicError, match=NOT_OWNER):
            transact(fork_ctx, adapter.functions.setAssetValue(DAI_ADDRESS, 1, 5), random_user)


class TestGetTvl:

    def test_locked_oracle_reverts(self, fork_ctx, adapter, owner):
        owner_tx(fork_ctx, owner, adapter.functions.setLock(1))

        with pytest.raises(ContractLogicError, match="ORACLE_LOCKED"):
            adapter.functions.getTvl().call()

        # lock expires after the given number of blocks
        mine_block(fork_ctx.w3)
        assert adapter.functions.getTvl().call() > 0

    def test_stale_feed_reverts(self, fork_ctx, adapter):
        assert adapter.functions.getTvl().call() > 0

        increase_time(fork_ctx.w3, STALE_PERIOD + 1)
        mine_block(fork_ctx.w3)

        with pytest.raises(ContractLogicError, match="CHAINLINK_STALE_DATA"):
            adapter.functions.getTvl().call()
        print("✅ Stale Chainlink data rejected")

    def test_manual_value_precedence(self, fork_ctx, adapter, owner):
        chainlink_value = adapter.functions.getTvl().call()
        manual_value = token_amount(75e6, 8)

        owner_tx(fork_ctx, owner, adapter.functions.setLock(5))
        owner_tx(fork_ctx, owner, adapter.functions.setTvl(manual_value, 2))

        # lock takes precedence over the manual value
        with pytest.raises(ContractLogicError):
            adapter.functions.getTvl().call()

        owner_tx(fork_ctx, owner, adapter.functions.setLock(0))
        assert adapter.functions.getTvl().call() == manual_value

        # manual value expires, back to Chainlink
        mine_block(fork_ctx.w3)
        assert adapter.functions.getTvl().call() == chainlink_value
        print("✅ Lock > manual value > Chainlink")
