import json

import pytest
from django.test import RequestFactory, TestCase
from django.utils import timezone

from apmc_core.middleware import CurrentTenantMiddleware
from apmc_core.models import Farmer, LedgerEntry, Lot, Tenant
from apmc_core.services import (
    create_tax_invoice,
    generate_balance_sheet,
    generate_farmer_day_bill,
    get_buyer_day_bills,
)
from apmc_core.views import farmer_day_bills_view

from .helpers import MarketFixtureMixin


class TenantIsolationManagerTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant_a = self.make_tenant(name="Trader A", code="APMC-A")
        self.tenant_b = self.make_tenant(name="Trader B", code="APMC-B")
        self.farmer_a = self.make_farmer(self.tenant_a, name="Farmer A")
        self.farmer_b = self.make_farmer(self.tenant_b, name="Farmer B")
        self.buyer_b = self.make_buyer(self.tenant_b, name="Buyer B")
        self.today = timezone.localdate()
        # lot numbers restart per tenant
        self.lot_a = self.make_lot(self.tenant_a, self.farmer_a, "1")
        self.lot_b = self.make_lot(self.tenant_b, self.farmer_b, "1", buyer=self.buyer_b)

    def test_for_tenant_returns_only_that_tenants_objects(self):
        """Compare farmer primary keys"""
        self.assertListEqual(
            list(Farmer.objects.for_tenant(self.tenant_a).values_list("pk", flat=True)),
            [self.farmer_a.pk],
        )
        self.assertListEqual(
            list(Lot.objects.for_tenant(self.tenant_b).values_list("pk", flat=True)),
            [self.lot_b.pk],
        )

    def test_get_other_tenant_object_raises_does_not_exist(self):
        with self.assertRaises(Farmer.DoesNotExist):
            Farmer.objects.for_tenant(self.tenant_a).get(pk=self.farmer_b.pk)

    def test_day_bill_for_foreign_farmer_is_none(self):
        self.assertIsNone(generate_farmer_day_bill(self.farmer_b.pk, self.today, self.tenant_a))

    def test_buyer_bills_stay_inside_tenant(self):
        self.assertEqual(get_buyer_day_bills(self.today, self.tenant_a), [])
        self.assertEqual(len(get_buyer_day_bills(self.today, self.tenant_b)), 1)

    def test_ledger_and_statements_stay_inside_tenant(self):
        create_tax_invoice(self.buyer_b, date=self.today)
        self.assertFalse(LedgerEntry.objects.for_tenant(self.tenant_a).exists())
        self.assertEqual(
            generate_balance_sheet(self.tenant_a)["accountsReceivable"],
            generate_balance_sheet(self.tenant_a)["totalAssets"],
        )
        self.assertEqual(str(generate_balance_sheet(self.tenant_a)["totalAssets"]), "0.00")
        self.assertEqual(str(generate_balance_sheet(self.tenant_b)["totalAssets"]), "10878.00")


""" Middleware and views """
@pytest.mark.django_db
def test_middleware_attaches_users_tenant(django_user_model):
    tenant = Tenant.objects.create(name="T", slug="t", apmc_code="T-1", mobile_number="1")
    user = django_user_model.objects.create_user(username="alice", password="pw", tenant=tenant)

    request = RequestFactory().get("/")
    request.user = user
    CurrentTenantMiddleware(lambda r: None).process_request(request)
    assert request.tenant == tenant


@pytest.mark.django_db
def test_farmer_day_bills_view_returns_only_tenant_data(django_user_model):
    helper = MarketFixtureMixin()
    t1 = helper.make_tenant(name="Trader A", code="APMC-A")
    t2 = helper.make_tenant(name="Trader B", code="APMC-B")
    helper.make_lot(t1, helper.make_farmer(t1, name="Farmer A"), "1")
    helper.make_lot(t2, helper.make_farmer(t2, name="Farmer B"), "1")
    u1 = django_user_model.objects.create_user(username="alice", password="pw", tenant=t1)

    # Bypass client & call view with a RequestFactory
    request = RequestFactory().get("/api/farmer-bills/")
    request.user = u1
    request.tenant = t1  # manually simulate middleware

    response = farmer_day_bills_view(request)
    data = json.loads(response.content)

    names = [bill["farmerName"] for bill in data]
    assert "Farmer A" in names
    assert "Farmer B" not in names
