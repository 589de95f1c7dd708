import datetime
from decimal import Decimal

import pytest
from django.test import TestCase
from django.utils import timezone

from apmc_core.services import (
    generate_cess_report,
    generate_gst_report,
    generate_tax_report,
    get_date_range,
)

from .helpers import MarketFixtureMixin


class ComplianceReportTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)
        self.buyer = self.make_buyer(self.tenant)
        self.today = timezone.localdate()
        self.make_lot(self.tenant, self.farmer, "L-1", buyer=self.buyer)
        # still being weighed, never reported
        self.make_lot(self.tenant, self.farmer, "L-2", price=None)
        self.start, self.end = get_date_range("daily", self.today)

    def test_tax_report(self):
        report = generate_tax_report(self.tenant, self.start, self.end, "daily")
        summary = report["summary"]
        self.assertEqual(summary["reportType"], "daily")
        self.assertEqual(summary["totalTransactions"], 1)
        self.assertEqual(summary["totalWeightQuintals"], Decimal("5"))
        self.assertEqual(summary["basicAmount"], Decimal("10000.00"))
        self.assertEqual(summary["packaging"], Decimal("50.00"))
        self.assertEqual(summary["weighingCharges"], Decimal("20.00"))
        self.assertEqual(summary["commission"], Decimal("200.00"))
        self.assertEqual(summary["cessAmount"], Decimal("60.00"))
        # SGST and CGST on basic + packaging + weighing + commission
        self.assertEqual(summary["sgstAmount"], Decimal("256.75"))
        self.assertEqual(summary["cgstAmount"], Decimal("256.75"))
        self.assertEqual(summary["totalAmount"], Decimal("10843.50"))

        row = report["transactions"][0]
        self.assertEqual(row["lotNumber"], "L-1")
        self.assertEqual(row["buyerName"], "Lakshmi Mills")
        self.assertEqual(row["farmerName"], "Ramesh")

    def test_cess_report(self):
        summary = generate_cess_report(self.tenant, self.start, self.end)["summary"]
        self.assertEqual(summary["cessRate"], Decimal("0.6"))
        self.assertEqual(summary["cessAmount"], Decimal("60.00"))

    def test_gst_report(self):
        summary = generate_gst_report(self.tenant, self.start, self.end)["summary"]
        self.assertEqual(summary["sgstAmount"], Decimal("250.00"))
        self.assertEqual(summary["cgstAmount"], Decimal("250.00"))
        self.assertEqual(summary["totalAmount"], Decimal("10500.00"))

    def test_plain_dates_cover_whole_days(self):
        report = generate_cess_report(self.tenant, self.today, self.today)
        self.assertEqual(report["summary"]["totalTransactions"], 1)
        self.assertEqual(report["summary"]["period"], f"{self.today} to {self.today}")

    def test_split_lot_lists_every_bag_buyer(self):
        other = self.make_buyer(self.tenant, name="Annapurna Foods")
        self.make_lot(
            self.tenant, self.farmer, "S-1", bags=2,
            bag_buyers={1: self.buyer, 2: other},
        )
        rows = generate_tax_report(self.tenant, self.start, self.end)["transactions"]
        split = next(r for r in rows if r["lotNumber"] == "S-1")
        self.assertEqual(split["buyerName"], "Annapurna Foods, Lakshmi Mills")

    def test_empty_window(self):
        start, end = get_date_range("daily", self.today - datetime.timedelta(days=3))
        summary = generate_gst_report(self.tenant, start, end)["summary"]
        self.assertEqual(summary["totalTransactions"], 0)
        self.assertEqual(summary["totalAmount"], Decimal("0.00"))


""" Report windows """
def test_weekly_range_starts_on_sunday():
    # 2024-05-15 is a Wednesday
    start, end = get_date_range("weekly", datetime.date(2024, 5, 15))
    assert timezone.localtime(start).date() == datetime.date(2024, 5, 12)
    assert timezone.localtime(end).date() == datetime.date(2024, 5, 18)


def test_weekly_range_on_a_sunday_starts_that_day():
    start, _ = get_date_range("weekly", datetime.date(2024, 5, 12))
    assert timezone.localtime(start).date() == datetime.date(2024, 5, 12)


def test_monthly_range_handles_leap_february():
    start, end = get_date_range("monthly", datetime.date(2024, 2, 10))
    assert timezone.localtime(start).date() == datetime.date(2024, 2, 1)
    assert timezone.localtime(end).date() == datetime.date(2024, 2, 29)


def test_yearly_range_is_calendar_year():
    start, end = get_date_range("yearly", datetime.date(2024, 7, 1))
    assert timezone.localtime(start).date() == datetime.date(2024, 1, 1)
    assert timezone.localtime(end).date() == datetime.date(2024, 12, 31)


def test_daily_range_spans_the_whole_day():
    start, end = get_date_range("daily", datetime.date(2024, 7, 1))
    assert timezone.localtime(start).time() == datetime.time.min
    assert timezone.localtime(end).time() == datetime.time.max


def test_unknown_report_type():
    with pytest.raises(ValueError):
        get_date_range("fortnightly", datetime.date(2024, 7, 1))
