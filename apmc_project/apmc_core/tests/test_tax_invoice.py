import datetime
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from apmc_core.exceptions import DuplicateBillError
from apmc_core.models import LedgerEntry, Lot, TaxInvoice
from apmc_core.services import (
    create_tax_invoice,
    generate_buyer_day_bill,
    generate_tax_invoice,
    get_buyer_day_bills,
)
from apmc_core.services.invoicing import invoice_number_for

from .helpers import MarketFixtureMixin


class TaxInvoiceTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)
        self.buyer = self.make_buyer(self.tenant)
        self.today = timezone.localdate()
        self.lot = self.make_lot(self.tenant, self.farmer, "L-1", buyer=self.buyer)

    def test_invoice_calculations(self):
        invoice = generate_tax_invoice(self.buyer.pk, self.tenant, self.today)
        calc = invoice["calculations"]

        self.assertEqual(calc["basicAmount"], Decimal("10000.00"))
        self.assertEqual(calc["packaging"], Decimal("50.00"))
        self.assertEqual(calc["hamali"], Decimal("30.00"))
        self.assertEqual(calc["weighingCharges"], Decimal("20.00"))
        self.assertEqual(calc["commission"], Decimal("200.00"))
        self.assertEqual(calc["cess"], Decimal("60.00"))
        self.assertEqual(calc["taxableAmount"], Decimal("10360.00"))
        self.assertEqual(calc["sgst"], Decimal("259.00"))
        self.assertEqual(calc["cgst"], Decimal("259.00"))
        self.assertEqual(calc["igst"], Decimal("0.00"))
        self.assertEqual(calc["totalAmount"], Decimal("10878.00"))

    def test_totals_add_up(self):
        calc = generate_tax_invoice(self.buyer.pk, self.tenant, self.today)["calculations"]
        self.assertEqual(
            calc["taxableAmount"],
            calc["basicAmount"] + calc["packaging"] + calc["hamali"]
            + calc["weighingCharges"] + calc["commission"] + calc["cess"],
        )
        self.assertEqual(calc["totalAmount"], calc["taxableAmount"] + calc["sgst"] + calc["cgst"])

    def test_invoice_number_format(self):
        invoice = generate_tax_invoice(self.buyer.pk, self.tenant, self.today)
        self.assertEqual(
            invoice["invoiceNumber"], f"INV-{self.today:%Y%m%d}-{self.buyer.pk:03d}"
        )
        self.assertEqual(invoice_number_for(7, datetime.date(2024, 6, 1)), "INV-20240601-007")

    def test_items_describe_each_lot(self):
        item = generate_tax_invoice(self.buyer.pk, self.tenant, self.today)["items"][0]
        self.assertEqual(item["lotNo"], "L-1")
        self.assertEqual(item["itemName"], "SONA MASURI")
        self.assertEqual(item["hsnCode"], "1006")
        self.assertEqual(item["bags"], 10)
        self.assertEqual(item["weightKg"], Decimal("500.00"))
        self.assertEqual(item["ratePerQuintal"], Decimal("2000.00"))
        self.assertEqual(item["allocation"], "single")

    def test_active_lots_are_not_invoiced(self):
        other_buyer = self.make_buyer(self.tenant, name="Other Mills")
        self.make_lot(self.tenant, self.farmer, "L-2", buyer=other_buyer, price=None)
        self.assertIsNone(generate_tax_invoice(other_buyer.pk, self.tenant, self.today))

    def test_create_persists_and_marks_lots(self):
        invoice = create_tax_invoice(self.buyer, date=self.today)

        self.assertEqual(invoice.total_amount, Decimal("10878.00"))
        self.assertEqual(invoice.total_gst, Decimal("518.00"))
        self.assertEqual(invoice.lot_ids, ["L-1"])
        lot = Lot.objects.get(pk=self.lot.pk)
        self.assertTrue(lot.bill_generated)
        self.assertIsNotNone(lot.bill_generated_at)
        self.assertEqual(lot.amount_due, Decimal("10878.00"))

    def test_amount_due_is_split_across_lots(self):
        self.make_lot(self.tenant, self.farmer, "L-2", buyer=self.buyer)
        invoice = create_tax_invoice(self.buyer, date=self.today)
        self.assertEqual(sorted(invoice.lot_ids), ["L-1", "L-2"])
        for lot in Lot.objects.filter(lot_number__in=["L-1", "L-2"]):
            self.assertEqual(lot.amount_due, (invoice.total_amount / 2).quantize(Decimal("0.01")))

    def test_ledger_records_sale_and_receivable(self):
        invoice = create_tax_invoice(self.buyer, date=self.today)
        rows = {
            e.account_head: e
            for e in LedgerEntry.objects.filter(reference_type="tax_invoice", reference_id=invoice.pk)
        }
        self.assertEqual(rows["sales"].credit_amount, Decimal("10000.00"))
        self.assertEqual(rows["accounts_receivable"].debit_amount, Decimal("10878.00"))
        self.assertEqual(rows["service_charges"].credit_amount, Decimal("300.00"))

    def test_invoiced_lots_are_excluded_from_later_documents(self):
        create_tax_invoice(self.buyer, date=self.today)
        self.assertIsNone(generate_tax_invoice(self.buyer.pk, self.tenant, self.today))

    def test_second_invoice_same_day_is_rejected(self):
        create_tax_invoice(self.buyer, date=self.today)
        with self.assertRaises(DuplicateBillError):
            create_tax_invoice(self.buyer, date=self.today)
        self.assertEqual(TaxInvoice.objects.count(), 1)

    def test_nothing_to_invoice_returns_none(self):
        idle = self.make_buyer(self.tenant, name="Idle Traders")
        self.assertIsNone(create_tax_invoice(idle, date=self.today))
        self.assertFalse(TaxInvoice.objects.filter(buyer=idle).exists())


""" Lots split between buyers at bag level """
class BagAllocationTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)
        self.buyer_a = self.make_buyer(self.tenant, name="A Mills")
        self.buyer_b = self.make_buyer(self.tenant, name="B Traders")
        self.today = timezone.localdate()
        # bags 1-6 to A, 7-10 to B
        allocation = {n: self.buyer_a if n <= 6 else self.buyer_b for n in range(1, 11)}
        self.lot = self.make_lot(self.tenant, self.farmer, "S-1", bag_buyers=allocation)

    def test_each_buyer_is_invoiced_for_own_bags(self):
        invoice_a = generate_tax_invoice(self.buyer_a.pk, self.tenant, self.today)
        invoice_b = generate_tax_invoice(self.buyer_b.pk, self.tenant, self.today)

        item_a, item_b = invoice_a["items"][0], invoice_b["items"][0]
        self.assertEqual(item_a["allocation"], "multi")
        self.assertEqual(item_a["bags"], 6)
        self.assertEqual(item_a["basicAmount"], Decimal("6000.00"))
        self.assertEqual(item_b["bags"], 4)
        self.assertEqual(item_b["basicAmount"], Decimal("4000.00"))
        # packaging is charged per bag actually bought
        self.assertEqual(invoice_a["calculations"]["packaging"], Decimal("30.00"))

    def test_buyer_day_bills_cover_every_buyer(self):
        bills = get_buyer_day_bills(self.today, self.tenant)
        self.assertEqual(
            sorted(b["buyerId"] for b in bills), sorted([self.buyer_a.pk, self.buyer_b.pk])
        )

    def test_buyer_day_bill_charges(self):
        bill = generate_buyer_day_bill(self.buyer_a.pk, self.today, self.tenant)
        lot = bill["lots"][0]
        self.assertEqual(lot["numberOfBags"], 6)
        self.assertEqual(lot["basicAmount"], Decimal("6000.00"))
        self.assertEqual(lot["charges"]["sgst"], Decimal("150.00"))
        self.assertEqual(lot["charges"]["cess"], Decimal("36.00"))
        self.assertEqual(bill["summary"]["totalPayable"], bill["summary"]["basicAmount"] + bill["summary"]["totalCharges"])

    def test_invoicing_one_buyer_leaves_the_other_open(self):
        create_tax_invoice(self.buyer_a, date=self.today)
        invoice_b = generate_tax_invoice(self.buyer_b.pk, self.tenant, self.today)
        self.assertIsNotNone(invoice_b)
        self.assertEqual(invoice_b["lotIds"], ["S-1"])


class PartlyReallocatedLotTests(MarketFixtureMixin, TestCase):
    """The lot is sold to one buyer and a single bag went to another"""

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)
        self.owner = self.make_buyer(self.tenant, name="A Mills")
        self.other = self.make_buyer(self.tenant, name="B Traders")
        self.today = timezone.localdate()
        self.lot = self.make_lot(
            self.tenant, self.farmer, "D-1", buyer=self.owner, bag_buyers={10: self.other}
        )

    def test_owner_is_invoiced_for_unassigned_bags(self):
        item = generate_tax_invoice(self.owner.pk, self.tenant, self.today)["items"][0]
        self.assertEqual(item["allocation"], "multi")
        self.assertEqual(item["bags"], 9)
        self.assertEqual(item["weightKg"], Decimal("450.00"))
        self.assertEqual(item["basicAmount"], Decimal("9000.00"))

    def test_reallocated_bag_goes_to_its_buyer(self):
        item = generate_tax_invoice(self.other.pk, self.tenant, self.today)["items"][0]
        self.assertEqual(item["bags"], 1)
        self.assertEqual(item["basicAmount"], Decimal("1000.00"))

    def test_owner_day_bill_counts_unassigned_bags(self):
        bill = generate_buyer_day_bill(self.owner.pk, self.today, self.tenant)
        self.assertEqual(bill["lots"][0]["numberOfBags"], 9)
        self.assertEqual(bill["lots"][0]["basicAmount"], Decimal("9000.00"))
