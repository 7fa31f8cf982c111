from abc import ABC, abstractmethod

from seller_finance.schemas.payout import TrustScore, TrustScoreDriver


def risk_level_for(score: int) -> str:
    if score >= 80:
        return "low"
    if score >= 60:
        return "medium"
    return "high"


class TrustScoreProvider(ABC):
    """Source of a seller's 0-100 trust score.

    Call sites only depend on compute(), so a model-backed provider can
    replace the static one without touching them.
    """

    @abstractmethod
    def compute(self, vendor_id: str) -> TrustScore:
        ...


class StaticTrustScoreProvider(TrustScoreProvider):
    """Placeholder: the same baseline score and drivers for every seller.

    No seller metrics are read. The drivers are illustrative and the trend is
    always "stable" until a real scoring model exists.
    """

    DRIVERS = [
        ("Return rate", -15, "Higher than average"),
        ("Delivery time", -10, "Delayed shipments"),
    ]

    def __init__(self, baseline: int = 75, trend: str = "stable"):
        self.baseline = max(0, min(100, int(baseline)))
        self.trend = trend

    def compute(self, vendor_id: str) -> TrustScore:
        return TrustScore(
            score=self.baseline,
            risk_level=risk_level_for(self.baseline),
            top_drivers=[
                TrustScoreDriver(factor=factor, impact=impact, description=description)
                for factor, impact, description in self.DRIVERS
            ],
            trend=self.trend,
        )
