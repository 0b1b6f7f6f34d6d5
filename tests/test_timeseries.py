"""Tests for monthly, daily and status bucketing."""

from datetime import date, timedelta

from billtrack.engine import timeseries
from billtrack.models.money import Money

from conftest import make_payment, row


def _paid(amount, d):
    return make_payment(amount, "paid", d)


class TestMonthlyRevenue:
    def test_groups_by_calendar_month(self):
        payments = [
            _paid("10.00", date(2024, 3, 1)),
            _paid("5.50", date(2024, 3, 31)),
            _paid("1.00", date(2024, 4, 15)),
        ]
        out = timeseries.monthly_revenue(payments)
        assert [(m.month_label, m.revenue, m.payment_count) for m in out] == [
            ("Mar 2024", Money("15.50"), 2),
            ("Apr 2024", Money("1.00"), 1),
        ]

    def test_keeps_most_recent_six_of_24_months(self):
        payments = []
        for i in range(24):
            y, m = divmod(i, 12)
            payments.append(_paid("1.00", date(2022 + y, m + 1, 5)))
        # ordre d'entrée mélangé
        payments.reverse()
        out = timeseries.monthly_revenue(payments)
        assert len(out) == 6
        assert [(m.year, m.month) for m in out] == [(2023, mo) for mo in range(7, 13)]

    def test_same_month_different_years_are_distinct(self):
        out = timeseries.monthly_revenue([_paid("1.00", date(2023, 3, 1)), _paid("2.00", date(2024, 3, 1))])
        assert [m.month_label for m in out] == ["Mar 2023", "Mar 2024"]

    def test_excludes_unpaid_and_undated(self):
        payments = [
            make_payment("9.00", "pending"),
            make_payment("9.00", "overdue"),
            make_payment("9.00", "paid"),  # sans paid_date
            _paid("1.00", date(2024, 1, 2)),
        ]
        out = timeseries.monthly_revenue(payments)
        assert len(out) == 1 and out[0].revenue == Money("1.00")

    def test_custom_window(self):
        payments = [_paid("1.00", date(2024, m, 1)) for m in range(1, 5)]
        assert [m.month for m in timeseries.monthly_revenue(payments, window=2)] == [3, 4]
        assert timeseries.monthly_revenue(payments, window=0) == []

    def test_iso_string_dates_from_raw_rows(self):
        out = timeseries.monthly_revenue([row("4.00", paid_date="2024-02-29")])
        assert out[0].month_label == "Feb 2024"


class TestDailyTimeline:
    def test_sums_per_day_in_insertion_order(self):
        payments = [
            _paid("3.00", date(2024, 3, 12)),
            _paid("1.00", date(2024, 3, 10)),
            _paid("2.00", date(2024, 3, 12)),
        ]
        out = timeseries.daily_timeline(payments)
        assert [(d.date_label, d.revenue) for d in out] == [
            ("Mar 12", Money("5.00")),
            ("Mar 10", Money("1.00")),
        ]

    def test_same_day_label_across_years_collides(self):
        out = timeseries.daily_timeline([_paid("1.00", date(2023, 3, 10)), _paid("2.00", date(2024, 3, 10))])
        assert len(out) == 1
        assert out[0].revenue == Money("3.00")

    def test_keeps_last_30_buckets(self):
        payments = [_paid("1.00", date(2024, 1, 1) + timedelta(days=i))
                    for i in range(40)]
        out = timeseries.daily_timeline(payments)
        assert len(out) == 30
        assert out[0].date_label == "Jan 11"
        assert out[-1].date_label == "Feb 09"

    def test_excludes_payments_without_paid_date(self):
        assert timeseries.daily_timeline([make_payment("1.00", "paid")]) == []


class TestStatusDistribution:
    def test_concrete_scenario(self, scenario_payments):
        out = timeseries.status_distribution(scenario_payments)
        assert [(s.status, s.amount) for s in out] == [
            ("paid", Money("100.00")),
            ("pending", Money("50.00")),
            ("overdue", Money("25.00")),
        ]

    def test_fixed_order_and_zero_statuses_omitted(self):
        payments = [make_payment("2.00", "overdue"), make_payment("0.00", "pending"), make_payment("1.00", "paid")]
        out = timeseries.status_distribution(payments)
        assert [s.status for s in out] == ["paid", "overdue"]

    def test_counts_paid_without_paid_date(self):
        out = timeseries.status_distribution([make_payment("4.00", "paid")])
        assert out[0].amount == Money("4.00")

    def test_empty(self):
        assert timeseries.status_distribution([]) == []
