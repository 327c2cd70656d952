"""Tests for engine configuration."""

import pytest

from pairswap import Engine
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.constants import PRICE_SCALE


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        assert DEFAULT_ENGINE_CONFIG == EngineConfig(997, 1000, PRICE_SCALE)

    def test_fee_less_allowed(self):
        config = EngineConfig(fee_numerator=1, fee_denominator=1)
        assert Engine(config=config).amm.fee.is_fee_less

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"fee_numerator": 0},
            {"fee_numerator": 1001},
            {"fee_denominator": 0},
            {"price_scale": 0},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PAIRSWAP_FEE_NUMERATOR", "9975")
        monkeypatch.setenv("PAIRSWAP_FEE_DENOMINATOR", "10000")
        monkeypatch.setenv("PAIRSWAP_PRICE_SCALE", "1000000")

        config = EngineConfig.from_env()

        assert config == EngineConfig(9975, 10000, 10**6)

    def test_from_env_defaults(self, monkeypatch):
        for name in ("PAIRSWAP_FEE_NUMERATOR", "PAIRSWAP_FEE_DENOMINATOR", "PAIRSWAP_PRICE_SCALE"):
            monkeypatch.delenv(name, raising=False)
        assert EngineConfig.from_env() == DEFAULT_ENGINE_CONFIG

    def test_engine_uses_fee_tier(self):
        engine = Engine(config=EngineConfig(fee_numerator=9975, fee_denominator=10000))
        # 1000 * 9975 * 10000 // (10000 * 10000 + 1000 * 9975) = 907
        assert engine.quote_out(1000, 10000, 10000) == 907
