import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from apmc_core.exceptions import UnbalancedLedgerError
from apmc_core.models import BankTransaction, LedgerEntry
from apmc_core.services import (
    record_balanced_entries,
    record_expense,
    record_payment_made,
    record_payment_received,
    record_transaction,
)

from .helpers import MarketFixtureMixin


def _entry(head, debit=0, credit=0, **extra):
    entry = {
        "transaction_type": "income",
        "entity_type": "buyer",
        "entity_id": None,
        "reference_type": "manual",
        "reference_id": None,
        "debit_amount": debit,
        "credit_amount": credit,
        "description": "test",
        "account_head": head,
        "transaction_date": datetime.date(2024, 6, 1),
    }
    entry.update(extra)
    return entry


class BalancedEntriesTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()

    def test_balanced_posting_is_written(self):
        rows = record_balanced_entries(
            self.tenant, [_entry("cash", debit="100.005"), _entry("service_charges", credit="100.01")]
        )
        self.assertEqual(len(rows), 2)
        # amounts are rounded to paise before the balance check
        self.assertEqual(rows[0].debit_amount, Decimal("100.01"))
        self.assertEqual(LedgerEntry.objects.for_tenant(self.tenant).count(), 2)

    def test_unbalanced_posting_writes_nothing(self):
        with self.assertRaises(UnbalancedLedgerError):
            record_balanced_entries(
                self.tenant, [_entry("cash", debit=100), _entry("service_charges", credit=90)]
            )
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_allow_imbalance_writes_anyway(self):
        with self.assertLogs("apmc_core.services.recorder", level="WARNING"):
            rows = record_balanced_entries(
                self.tenant,
                [_entry("cash", debit=100), _entry("service_charges", credit=90)],
                allow_imbalance=True,
            )
        self.assertEqual(len(rows), 2)

    def test_single_row_is_not_a_posting(self):
        with self.assertRaises(ValidationError):
            record_balanced_entries(self.tenant, [_entry("cash", debit=100)])

    def test_unknown_head_or_negative_amount_is_rejected(self):
        with self.assertRaises(ValidationError):
            record_balanced_entries(
                self.tenant, [_entry("petty_cash", debit=10), _entry("sales", credit=10)]
            )
        with self.assertRaises(ValidationError):
            record_balanced_entries(
                self.tenant, [_entry("cash", debit=-10), _entry("sales", credit=-10)]
            )
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_fiscal_year_follows_transaction_date(self):
        entry = record_transaction(
            self.tenant, "income", "buyer", None, "manual", None, 10, 0, "x", "cash",
            transaction_date=datetime.date(2024, 3, 31),
        )
        self.assertEqual(entry.fiscal_year, "2023-2024")

    def test_ledger_rows_are_append_only(self):
        entry = record_transaction(
            self.tenant, "income", "buyer", None, "manual", None, 10, 0, "x", "cash"
        )
        entry.description = "changed"
        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()


""" Payments and expenses """
class PaymentTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)
        self.buyer = self.make_buyer(self.tenant)

    def test_cash_receipt_debits_cash_and_credits_receivable(self):
        cash, receivable = record_payment_received(self.tenant, self.buyer.pk, "5000", "cash")
        self.assertEqual((cash.account_head, cash.debit_amount), ("cash", Decimal("5000.00")))
        self.assertEqual(
            (receivable.account_head, receivable.credit_amount),
            ("accounts_receivable", Decimal("5000.00")),
        )
        self.assertFalse(BankTransaction.objects.exists())

    def test_non_cash_receipt_goes_to_bank(self):
        bank, _ = record_payment_received(self.tenant, self.buyer.pk, "5000", "upi")
        self.assertEqual(bank.account_head, "bank")
        tx = BankTransaction.objects.get()
        self.assertEqual(tx.transaction_type, "deposit")
        self.assertEqual(tx.bank_account, "main")
        self.assertEqual(tx.amount, Decimal("5000.00"))

    def test_farmer_payment_debits_payable(self):
        bank, payable = record_payment_made(self.tenant, self.farmer.pk, 9700, "bank_transfer")
        self.assertEqual((bank.account_head, bank.credit_amount), ("bank", Decimal("9700.00")))
        self.assertEqual(
            (payable.account_head, payable.debit_amount), ("accounts_payable", Decimal("9700.00"))
        )
        self.assertEqual(BankTransaction.objects.get().transaction_type, "withdrawal")

    def test_non_positive_payment_is_rejected(self):
        with self.assertRaises(ValidationError):
            record_payment_received(self.tenant, self.buyer.pk, 0, "cash")
        self.assertFalse(LedgerEntry.objects.exists())

    def test_expense_is_saved_and_posted(self):
        expense = record_expense(
            self.tenant,
            category="office",
            description="Stationery",
            amount="250",
            expense_date="2024-06-10",
        )
        rows = {e.account_head: e for e in LedgerEntry.objects.filter(reference_type="expense")}
        self.assertEqual(expense.amount, Decimal("250.00"))
        self.assertEqual(rows["expenses"].debit_amount, Decimal("250.00"))
        self.assertEqual(rows["cash"].credit_amount, Decimal("250.00"))

    def test_invalid_expense_is_rolled_back(self):
        with self.assertRaises(ValidationError):
            record_expense(
                self.tenant, category="office", description="x", amount="-1",
                expense_date="2024-06-10",
            )
        with self.assertRaises(ValidationError):
            record_expense(
                self.tenant, category="office", description="x", amount="10",
                expense_date="2024-06-10", payment_method="barter",
            )
        self.assertFalse(LedgerEntry.objects.exists())
