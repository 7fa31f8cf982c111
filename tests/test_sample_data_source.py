"""
Sample mode runs the live query paths against the bundled fixture.
"""
import pytest

from seller_finance.core.exceptions import VendorNotFound
from seller_finance.services.data_source import SampleDataSource


@pytest.fixture
def sample(settings):
    source = SampleDataSource(settings)
    yield source
    source.close()


def test_default_vendor_resolves(sample, settings):
    assert sample.resolve_vendor(settings.DEFAULT_VENDOR) == "1001"


def test_deleted_sample_vendor_is_hidden(sample):
    with pytest.raises(VendorNotFound):
        sample.resolve_vendor("thrift-kings")


def test_cancelled_orders_are_not_listed(sample):
    orders = sample.list_orders("1001")
    ids = {order.order_id for order in orders}

    assert len(orders) == 12
    assert "70013" not in ids


def test_sample_overview(sample):
    overview = sample.get_payout_overview("1001")

    assert overview.current_cycle == "PAYOUT-505"
    assert overview.eligible_orders == 4
    assert overview.eligible_amount == pytest.approx(360.0)
    assert overview.pending_amount == pytest.approx(180.0)
    assert overview.total_amount == pytest.approx(540.0)
    assert overview.held_orders == 1
    assert overview.confidence == "medium"
    assert [b.reason_code for b in overview.active_blockers] == ["QC_PENDING", "FF_PENDING"]
    assert [b.order_count for b in overview.active_blockers] == [2, 3]
    assert [p.payout_id for p in overview.payout_history] == [504, 503, 502, 501]


def test_sample_statements(sample):
    statements = sample.list_statements("1001")
    assert [s.payout_id for s in statements] == [505, 504, 503, 502, 501]

    detail = sample.get_statement("1001", 501)
    assert {line.order_line_id for line in detail.orders} == {"70001", "70002"}
    assert detail.breakdown.closing_balance == pytest.approx(
        sum(line.final_base - line.commission - line.shipping_payable_to_vendor
            for line in detail.orders)
    )
