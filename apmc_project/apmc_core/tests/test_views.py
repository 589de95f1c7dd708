import json
from unittest import mock

import pytest
from django.test import RequestFactory, TestCase
from django.utils import timezone

from apmc_core.models import Expense, FarmerBill, TaxInvoice, User
from apmc_core.views import (
    balance_sheet_view,
    expenses_view,
    farmer_bill_view,
    final_accounts_view,
    fiscal_year_view,
    payment_received_view,
    report_view,
    tax_invoice_view,
)

from .helpers import MarketFixtureMixin


class ApiViewTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.tenant = self.make_tenant()
        self.user = User.objects.create_user(
            username="clerk", password="pw", tenant=self.tenant, role="admin"
        )
        self.farmer = self.make_farmer(self.tenant)
        self.buyer = self.make_buyer(self.tenant)
        self.today = timezone.localdate()
        self.make_lot(self.tenant, self.farmer, "L-1", buyer=self.buyer)

    def get(self, view, path="/", params=None, **kwargs):
        request = self.factory.get(path, params or {})
        return self.call(view, request, **kwargs)

    def post(self, view, data, path="/", **kwargs):
        request = self.factory.post(path, data=json.dumps(data), content_type="application/json")
        return self.call(view, request, **kwargs)

    def call(self, view, request, **kwargs):
        request.user = self.user
        # manually simulate CurrentTenantMiddleware
        request.tenant = self.tenant
        response = view(request, **kwargs)
        return response, json.loads(response.content)

    def test_farmer_day_bill_preview(self):
        response, data = self.get(farmer_bill_view, farmer_id=self.farmer.pk)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["summary"]["netAmount"], "9700.00")

    def test_farmer_bill_create_and_duplicate(self):
        payload = {
            "pattiNumber": "P-100",
            "billData": {"totalAmount": "10000", "hamali": "30", "emptyBagCharges": "50",
                         "other": "20", "rok": "200"},
            "lotIds": ["L-1"],
            "billDate": self.today.isoformat(),
        }
        response, data = self.post(farmer_bill_view, payload, farmer_id=self.farmer.pk)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(data["netPayable"], "9700.00")
        self.assertEqual(FarmerBill.objects.get().created_by, self.user)

        payload["pattiNumber"] = "P-101"
        response, data = self.post(farmer_bill_view, payload, farmer_id=self.farmer.pk)
        self.assertEqual(response.status_code, 409)
        self.assertFalse(data["ok"])

    def test_farmer_bill_missing_data_is_bad_request(self):
        response, data = self.post(farmer_bill_view, {"pattiNumber": "P-1"}, farmer_id=self.farmer.pk)
        self.assertEqual(response.status_code, 400)
        self.assertIn("Missing required data", data["error"])

    def test_form_encoded_farmer_bill_is_bad_request(self):
        request = self.factory.post(
            "/", data={"pattiNumber": "P-1", "billData": "totalAmount=10000", "lotIds": "L-1"}
        )
        response, data = self.call(farmer_bill_view, request, farmer_id=self.farmer.pk)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(FarmerBill.objects.exists())

    def test_tax_invoice_preview_and_create(self):
        response, data = self.get(tax_invoice_view, buyer_id=self.buyer.pk)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["calculations"]["totalAmount"], "10878.00")
        self.assertFalse(TaxInvoice.objects.exists())

        response, data = self.post(tax_invoice_view, {}, buyer_id=self.buyer.pk)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(data["totalAmount"], "10878.00")
        self.assertEqual(data["lotIds"], ["L-1"])

        # nothing left to invoice
        response, _ = self.get(tax_invoice_view, buyer_id=self.buyer.pk)
        self.assertEqual(response.status_code, 404)

    def test_other_tenants_buyer_is_not_found(self):
        other = self.make_tenant(name="Other", code="APMC-002")
        foreign_buyer = self.make_buyer(other, name="Foreign")
        response, data = self.get(tax_invoice_view, buyer_id=foreign_buyer.pk)
        self.assertEqual(response.status_code, 404)
        self.assertFalse(data["ok"])

    def test_reports(self):
        response, data = self.get(report_view, params={"type": "daily"}, kind="tax")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["summary"]["totalTransactions"], 1)

        day = self.today.isoformat()
        response, data = self.get(
            report_view, params={"type": "custom", "start": day, "end": day}, kind="cess"
        )
        self.assertEqual(data["summary"]["cessAmount"], "60.00")

    def test_bad_report_requests(self):
        response, _ = self.get(report_view, params={"type": "hourly"}, kind="gst")
        self.assertEqual(response.status_code, 400)
        response, _ = self.get(report_view, kind="vat")
        self.assertEqual(response.status_code, 404)

    def test_balance_sheet_after_invoice(self):
        self.post(tax_invoice_view, {}, buyer_id=self.buyer.pk)
        response, data = self.get(balance_sheet_view)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["accountsReceivable"], "10878.00")
        self.assertEqual(data["totalAssets"], "10878.00")

    def test_malformed_fiscal_year_is_bad_request(self):
        response, _ = self.get(balance_sheet_view, params={"fiscalYear": "2024"})
        self.assertEqual(response.status_code, 400)

    def test_final_accounts_get_and_post(self):
        self.post(tax_invoice_view, {}, buyer_id=self.buyer.pk)
        response, data = self.get(final_accounts_view)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(data["totalSales"], "10000.00")

        response, data = self.post(final_accounts_view, {})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(data["accountsReceivable"], "10878.00")

    def test_final_accounts_async_enqueues_task(self):
        with mock.patch("apmc_core.tasks.generate_final_accounts_task.delay") as delay:
            delay.return_value.id = "task-1"
            response, data = self.post(final_accounts_view, {"async": True, "fiscalYear": "2024-2025"})
        self.assertEqual(response.status_code, 202)
        self.assertEqual(data["taskId"], "task-1")
        delay.assert_called_once_with(self.tenant.pk, "2024-2025")

    def test_payment_and_expense_endpoints(self):
        response, data = self.post(
            payment_received_view, {"buyerId": self.buyer.pk, "amount": "500", "paymentMethod": "upi"}
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(data["entries"]), 2)

        response, data = self.post(
            expenses_view,
            {"category": "labour", "description": "Loading", "amount": "120",
             "expenseDate": self.today.isoformat()},
        )
        self.assertEqual(response.status_code, 201)

        response, data = self.get(expenses_view)
        self.assertEqual(data["summary"]["total_expenses"], "120.00")
        self.assertEqual(data["expenses"][0]["category"], "labour")


""" Requests outside any tenant """
@pytest.mark.django_db
def test_request_without_tenant_is_forbidden(django_user_model):
    user = django_user_model.objects.create_user(username="root", password="pw")

    request = RequestFactory().get("/api/accounting/balance-sheet/")
    request.user = user
    request.tenant = None  # superadmins live outside any tenant

    response = balance_sheet_view(request)
    assert response.status_code == 403


def test_fiscal_year_view_needs_no_tenant():
    request = RequestFactory().get("/api/accounting/fiscal-year/")
    response = fiscal_year_view(request)
    data = json.loads(response.content)
    assert len(data["fiscalYear"]) == 9


@pytest.mark.django_db
@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_expense_amount_is_bad_request(django_user_model, amount):
    tenant = MarketFixtureMixin().make_tenant()
    user = django_user_model.objects.create_user(username="clerk", password="pw", tenant=tenant)

    request = RequestFactory().post(
        "/api/accounting/expenses/",
        data=json.dumps({"category": "labour", "description": "Loading", "amount": amount,
                         "expenseDate": "2024-06-15"}),
        content_type="application/json",
    )
    request.user = user
    request.tenant = tenant

    response = expenses_view(request)
    assert response.status_code == 400
    assert not Expense.objects.exists()
