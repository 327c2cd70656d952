"""Tests for the in-memory asset ledger."""

import pytest

from pairswap.assets import AssetLedger, InMemoryAssetLedger, ledger_from_env
from pairswap.constants import POOL_CUSTODY_ACCOUNT
from pairswap.engine import get_default_engine
from tests.helpers import ALICE, BOB, USDC, WETH, FlakyLedger


class TestInMemoryAssetLedger:
    """Tests for pull and push."""

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryAssetLedger(), AssetLedger)

    def test_credit(self):
        ledger = InMemoryAssetLedger()
        ledger.credit(WETH, ALICE, 100)
        assert ledger.balance_of(WETH, ALICE) == 100
        assert ledger.balance_of(USDC, ALICE) == 0

    def test_pull_moves_into_custody(self):
        ledger = InMemoryAssetLedger()
        ledger.credit(WETH, ALICE, 100)

        assert ledger.pull(WETH, ALICE, 60) is True

        assert ledger.balance_of(WETH, ALICE) == 40
        assert ledger.custody_balance(WETH) == 60
        assert ledger.balance_of(WETH, POOL_CUSTODY_ACCOUNT) == 60

    def test_pull_insufficient_balance_fails(self):
        ledger = InMemoryAssetLedger()
        ledger.credit(WETH, ALICE, 10)
        assert ledger.pull(WETH, ALICE, 11) is False
        assert ledger.balance_of(WETH, ALICE) == 10

    def test_push_moves_out_of_custody(self):
        ledger = InMemoryAssetLedger()
        ledger.credit(WETH, ALICE, 100)
        ledger.pull(WETH, ALICE, 100)

        assert ledger.push(WETH, BOB, 30) is True

        assert ledger.balance_of(WETH, BOB) == 30
        assert ledger.custody_balance(WETH) == 70

    def test_push_more_than_custody_fails(self):
        ledger = InMemoryAssetLedger()
        assert ledger.push(WETH, BOB, 1) is False

    def test_asset_identifiers_normalized(self):
        ledger = InMemoryAssetLedger()
        ledger.credit(WETH.upper().replace("0X", "0x"), ALICE, 5)
        assert ledger.balance_of(WETH, ALICE) == 5


class TestLedgerFromEnv:
    """Tests for choosing the ledger through PAIRSWAP_LEDGER_FACTORY."""

    def test_default_is_empty_in_memory_ledger(self, monkeypatch):
        monkeypatch.delenv("PAIRSWAP_LEDGER_FACTORY", raising=False)
        ledger = ledger_from_env()
        assert isinstance(ledger, InMemoryAssetLedger)
        assert ledger.balance_of(WETH, ALICE) == 0

    def test_factory_reference(self, monkeypatch):
        monkeypatch.setenv("PAIRSWAP_LEDGER_FACTORY", "tests.helpers.factories:FlakyLedger")
        assert isinstance(ledger_from_env(), FlakyLedger)

    def test_default_engine_uses_factory(self, monkeypatch):
        monkeypatch.setenv("PAIRSWAP_LEDGER_FACTORY", "tests.helpers.factories:FlakyLedger")
        assert isinstance(get_default_engine().ledger, FlakyLedger)

    def test_malformed_reference(self, monkeypatch):
        monkeypatch.setenv("PAIRSWAP_LEDGER_FACTORY", "tests.helpers.factories")
        with pytest.raises(ValueError):
            ledger_from_env()

    def test_factory_must_return_a_ledger(self, monkeypatch):
        monkeypatch.setenv("PAIRSWAP_LEDGER_FACTORY", "builtins:object")
        with pytest.raises(TypeError):
            ledger_from_env()
