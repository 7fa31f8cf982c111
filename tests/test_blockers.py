from datetime import datetime

from seller_finance.services.blockers import FF_PENDING, QC_PENDING, active_blockers, reasons_for

FULFILLED = datetime(2025, 1, 10)


def row(order_id, status="held", payout_id=None, qc_status="approved", ff_status="completed",
        ff_time=FULFILLED):
    return {
        "order_id": order_id,
        "status": status,
        "payout_id": payout_id,
        "qc_status": qc_status,
        "ff_status": ff_status,
        "ff_time": ff_time,
    }


def test_five_orders_missing_qc_yield_one_blocker():
    rows = [row(f"9000{n}", qc_status="pending") for n in range(5)]

    blockers = active_blockers(rows)

    assert [b.reason_code for b in blockers] == [QC_PENDING]
    assert blockers[0].order_count == 5
    assert blockers[0].severity == "medium"
    assert blockers[0].description == "Order 90000 and 4 other(s) are awaiting quality approval"


def test_missing_qc_status_counts_as_not_approved():
    assert reasons_for(row("1", qc_status=None)) == [QC_PENDING]


def test_fulfilment_blocker_when_status_or_time_missing():
    assert reasons_for(row("1", ff_status="in_transit")) == [FF_PENDING]
    assert reasons_for(row("2", ff_time=None)) == [FF_PENDING]


def test_order_with_both_problems_raises_both():
    assert reasons_for(row("1", qc_status="rejected", ff_status=None, ff_time=None)) == [
        QC_PENDING,
        FF_PENDING,
    ]


def test_linked_or_eligible_orders_raise_nothing():
    assert reasons_for(row("1", qc_status="pending", payout_id=505)) == []
    assert reasons_for(row("2", status="eligible", qc_status="pending")) == []
    assert reasons_for(row("3", status="in_progress", ff_time=None)) == []


def test_blockers_keep_first_seen_order():
    rows = [
        row("3", status="pending_eligibility", ff_time=None),
        row("2", qc_status="pending"),
    ]

    blockers = active_blockers(rows)

    assert [b.reason_code for b in blockers] == [FF_PENDING, QC_PENDING]
    assert blockers[0].title == "Fulfillment Pending"
    assert blockers[0].severity == "low"
    assert blockers[0].description == "Order 3 is awaiting fulfillment confirmation"


def test_no_candidates_no_blockers():
    assert active_blockers([]) == []
