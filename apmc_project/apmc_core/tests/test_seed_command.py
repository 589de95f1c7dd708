from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from apmc_core.models import FarmerBill, FinalAccounts, Lot, TaxInvoice, Tenant, User


class SeedDemoMarketCommandTests(TestCase):

    def run_command(self, **options):
        out = StringIO()
        call_command("seed_demo_market", date="2024-06-15", stdout=out, **options)
        return out.getvalue()

    def test_seeds_a_full_market_day(self):
        output = self.run_command()

        tenant = Tenant.objects.get(slug="demo-traders")
        self.assertEqual(User.objects.get(username="demo").tenant, tenant)
        self.assertEqual(Lot.objects.get(tenant=tenant).status, "completed")
        self.assertEqual(FarmerBill.objects.get(tenant=tenant).net_payable, Decimal("9700.00"))
        self.assertEqual(TaxInvoice.objects.get(tenant=tenant).total_amount, Decimal("10878.00"))
        self.assertTrue(FinalAccounts.objects.filter(tenant=tenant, fiscal_year="2024-2025").exists())
        self.assertIn("Demo market setup complete!", output)

    def test_rerun_does_not_duplicate(self):
        self.run_command()
        output = self.run_command()

        self.assertEqual(Tenant.objects.count(), 1)
        self.assertEqual(FarmerBill.objects.count(), 1)
        self.assertEqual(TaxInvoice.objects.count(), 1)
        self.assertEqual(FinalAccounts.objects.count(), 1)
        self.assertIn("already generated", output)

    def test_invalid_date_is_rejected(self):
        with self.assertRaises(CommandError):
            call_command("seed_demo_market", date="15/06/2024", stdout=StringIO())
