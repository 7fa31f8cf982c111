import pytest

from seller_finance.schemas.payout import TrustScore
from seller_finance.services.data_source import WarehouseDataSource
from seller_finance.services.trust_score import (
    StaticTrustScoreProvider,
    TrustScoreProvider,
    risk_level_for,
)


@pytest.mark.parametrize(
    "score, level",
    [(100, "low"), (80, "low"), (79, "medium"), (60, "medium"), (59, "high"), (0, "high")],
)
def test_risk_level_bands(score, level):
    assert risk_level_for(score) == level


def test_static_provider_is_the_same_for_every_seller():
    provider = StaticTrustScoreProvider()
    assert provider.compute("1001") == provider.compute("2006")

    trust = provider.compute("1001")
    assert trust.score == 75
    assert trust.risk_level == "medium"
    assert [d.impact for d in trust.top_drivers] == [-15, -10]


def test_baseline_is_clamped():
    assert StaticTrustScoreProvider(baseline=150).compute("1").score == 100
    assert StaticTrustScoreProvider(baseline=-5).compute("1").risk_level == "high"


class FixedProvider(TrustScoreProvider):
    def compute(self, vendor_id):
        return TrustScore(score=92, risk_level="low", top_drivers=[], trend="improving")


def test_provider_can_be_swapped(engine, settings, now):
    source = WarehouseDataSource(engine, settings, trust_provider=FixedProvider(), clock=lambda: now)

    trust = source.get_payout_overview("2001").trust_score

    assert trust.score == 92
    assert trust.trend == "improving"
