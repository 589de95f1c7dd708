import json
import logging
from functools import wraps

from django.core.exceptions import ValidationError
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .exceptions import DuplicateBillError
from .models import Buyer, Farmer
from .services import (
    analyze_profitability_by_buyer,
    analyze_profitability_by_farmer,
    calculate_gst_liability,
    create_farmer_bill,
    create_tax_invoice,
    generate_balance_sheet,
    generate_buyer_day_bill,
    generate_cash_flow_report,
    generate_cess_report,
    generate_farmer_day_bill,
    generate_final_accounts,
    generate_gst_report,
    generate_profit_loss_report,
    generate_tax_invoice,
    generate_tax_report,
    get_balance_sheet_as_of,
    get_buyer_day_bills,
    get_cash_flow_statement,
    get_date_range,
    get_detailed_expenses,
    get_expenses_summary,
    get_farmer_day_bills,
    get_fiscal_year,
    get_ledger_entries,
    get_simple_final_accounts,
    get_simple_final_accounts_date_range,
    get_trading_details,
    reconcile_final_accounts,
    record_expense,
    record_payment_made,
    record_payment_received,
)
from .services.fiscal import parse_date

logger = logging.getLogger(__name__)


# ----------------------------
# Helpers
# ----------------------------
def tenant_api(view):
    """
    Reject requests without a tenant and turn service errors into JSON:
    ValidationError -> 400, DuplicateBillError -> 409, Http404 -> 404
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if getattr(request, "tenant", None) is None:
            return JsonResponse({"ok": False, "error": "No tenant for this user"}, status=403)
        try:
            return view(request, *args, **kwargs)
        except ValidationError as e:
            return JsonResponse({"ok": False, "error": "; ".join(e.messages)}, status=400)
        except DuplicateBillError as e:
            return JsonResponse({"ok": False, "error": str(e)}, status=409)
        except Http404 as e:
            return JsonResponse({"ok": False, "error": str(e) or "Not found"}, status=404)
    return wrapper


def _payload(request):
    # Accept JSON bodies and regular form posts
    if request.content_type == "application/json":
        try:
            return json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            raise ValidationError("Request body is not valid JSON")
    return request.POST.dict()


def _period_args(request):
    """fiscalYear, or startDate + endDate, from the query string"""
    return {
        "fiscal_year": request.GET.get("fiscalYear") or None,
        "start_date": request.GET.get("startDate") or None,
        "end_date": request.GET.get("endDate") or None,
    }


def _day(request):
    value = request.GET.get("date")
    return parse_date(value) if value else None


def _not_found(message):
    return JsonResponse({"ok": False, "error": message}, status=404)


# ----------------------------
# Day bills
# ----------------------------
@require_GET
@tenant_api
def farmer_day_bills_view(request):
    day = _day(request) or timezone.localdate()
    return JsonResponse(get_farmer_day_bills(day, request.tenant), safe=False)


@require_http_methods(["GET", "POST"])
@tenant_api
def farmer_bill_view(request, farmer_id):
    # Look up the farmer inside the caller's tenant only
    farmer = get_object_or_404(Farmer.objects.for_tenant(request.tenant), pk=farmer_id)

    if request.method == "GET":
        day = _day(request) or timezone.localdate()
        bill = generate_farmer_day_bill(farmer.pk, day, request.tenant)
        if bill is None:
            return _not_found("No billable lots for this farmer on this date")
        return JsonResponse(bill)

    data = _payload(request)
    bill = create_farmer_bill(
        farmer,
        patti_number=data.get("pattiNumber"),
        bill_data=data.get("billData"),
        lot_ids=data.get("lotIds"),
        bill_date=data.get("billDate"),
        user=request.user,
    )
    return JsonResponse(
        {
            "ok": True,
            "id": bill.pk,
            "pattiNumber": bill.patti_number,
            "totalDeductions": bill.total_deductions,
            "netPayable": bill.net_payable,
        },
        status=201,
    )


@require_GET
@tenant_api
def buyer_day_bills_view(request):
    day = _day(request) or timezone.localdate()
    return JsonResponse(get_buyer_day_bills(day, request.tenant), safe=False)


@require_GET
@tenant_api
def buyer_day_bill_view(request, buyer_id):
    buyer = get_object_or_404(Buyer.objects.for_tenant(request.tenant), pk=buyer_id)
    day = _day(request) or timezone.localdate()
    bill = generate_buyer_day_bill(buyer.pk, day, request.tenant)
    if bill is None:
        return _not_found("No billable lots for this buyer on this date")
    return JsonResponse(bill)


@require_http_methods(["GET", "POST"])
@tenant_api
def tax_invoice_view(request, buyer_id):
    buyer = get_object_or_404(Buyer.objects.for_tenant(request.tenant), pk=buyer_id)

    if request.method == "GET":
        # Preview only, nothing is saved
        invoice = generate_tax_invoice(buyer.pk, request.tenant, _day(request))
        if invoice is None:
            return _not_found("No lots left to invoice for this buyer on this date")
        return JsonResponse(invoice)

    data = _payload(request)
    invoice = create_tax_invoice(buyer, date=data.get("date"), user=request.user)
    if invoice is None:
        return _not_found("No lots left to invoice for this buyer on this date")
    return JsonResponse(
        {
            "ok": True,
            "id": invoice.pk,
            "invoiceNumber": invoice.invoice_number,
            "totalAmount": invoice.total_amount,
            "lotIds": invoice.lot_ids,
        },
        status=201,
    )


# ----------------------------
# Compliance reports
# ----------------------------
REPORTS = {
    "tax": generate_tax_report,
    "cess": generate_cess_report,
    "gst": generate_gst_report,
}


@require_GET
@tenant_api
def report_view(request, kind):
    generate = REPORTS.get(kind)
    if generate is None:
        raise Http404(f"Unknown report {kind!r}")

    report_type = request.GET.get("type", "daily")
    if report_type == "custom":
        start, end = parse_date(request.GET.get("start")), parse_date(request.GET.get("end"))
        if start > end:
            raise ValidationError("start must not be after end")
    else:
        base = request.GET.get("date")
        try:
            start, end = get_date_range(report_type, parse_date(base) if base else None)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    return JsonResponse(generate(request.tenant, start, end, report_type))


# ----------------------------
# Final accounts
# ----------------------------
@require_GET
@tenant_api
def profit_loss_view(request):
    return JsonResponse(generate_profit_loss_report(request.tenant, **_period_args(request)))


@require_GET
@tenant_api
def balance_sheet_view(request):
    return JsonResponse(generate_balance_sheet(request.tenant, **_period_args(request)))


@require_GET
@tenant_api
def cash_flow_view(request):
    return JsonResponse(generate_cash_flow_report(request.tenant, **_period_args(request)))


@require_GET
@tenant_api
def gst_liability_view(request):
    return JsonResponse(calculate_gst_liability(request.tenant, **_period_args(request)))


@require_GET
@tenant_api
def profitability_view(request, party):
    analyze = {
        "farmers": analyze_profitability_by_farmer,
        "buyers": analyze_profitability_by_buyer,
    }.get(party)
    if analyze is None:
        raise Http404(f"Unknown party {party!r}")
    return JsonResponse(analyze(request.tenant, **_period_args(request)), safe=False)


@require_http_methods(["GET", "POST"])
@tenant_api
def final_accounts_view(request):
    if request.method == "POST":
        data = _payload(request)
        fiscal_year = data.get("fiscalYear") or None
        if data.get("async"):
            # import lazily, the worker module pulls in celery
            from .tasks import generate_final_accounts_task

            result = generate_final_accounts_task.delay(request.tenant.pk, fiscal_year)
            return JsonResponse({"ok": True, "taskId": result.id}, status=202)
        return JsonResponse(generate_final_accounts(request.tenant, fiscal_year), status=201)

    period = _period_args(request)
    if period["start_date"] and period["end_date"]:
        accounts = get_simple_final_accounts_date_range(
            request.tenant, period["start_date"], period["end_date"]
        )
    else:
        accounts = get_simple_final_accounts(request.tenant, period["fiscal_year"] or get_fiscal_year())
    return JsonResponse(accounts)


@require_GET
@tenant_api
def reconciliation_view(request):
    return JsonResponse(reconcile_final_accounts(request.tenant, **_period_args(request)))


@require_GET
@tenant_api
def trading_details_view(request):
    return JsonResponse(get_trading_details(request.tenant, **_period_args(request)))


# ----------------------------
# Ledger, expenses and payments
# ----------------------------
@require_GET
@tenant_api
def ledger_view(request):
    start, end = request.GET.get("startDate"), request.GET.get("endDate")
    return JsonResponse(
        {
            "entries": get_ledger_entries(request.tenant, start, end),
            "cashFlow": get_cash_flow_statement(request.tenant, start, end),
            "balanceSheet": get_balance_sheet_as_of(request.tenant, request.GET.get("asOf")),
        }
    )


@require_http_methods(["GET", "POST"])
@tenant_api
def expenses_view(request):
    if request.method == "GET":
        start, end = request.GET.get("startDate"), request.GET.get("endDate")
        return JsonResponse(
            {
                "summary": get_expenses_summary(request.tenant, start, end),
                "expenses": get_detailed_expenses(request.tenant, start, end),
            }
        )

    data = _payload(request)
    expense = record_expense(
        request.tenant,
        category=data.get("category"),
        subcategory=data.get("subcategory", ""),
        description=data.get("description"),
        amount=data.get("amount"),
        expense_date=data.get("expenseDate"),
        payment_method=data.get("paymentMethod", "cash"),
        receipt_number=data.get("receiptNumber", ""),
        vendor_name=data.get("vendorName", ""),
        is_recurring=data.get("isRecurring", False),
        user=request.user,
    )
    return JsonResponse({"ok": True, "id": expense.pk, "amount": expense.amount}, status=201)


@require_POST
@tenant_api
def payment_received_view(request):
    data = _payload(request)
    buyer = get_object_or_404(Buyer.objects.for_tenant(request.tenant), pk=data.get("buyerId"))
    rows = record_payment_received(
        request.tenant,
        buyer.pk,
        data.get("amount"),
        data.get("paymentMethod", "cash"),
        reference_id=data.get("referenceId"),
        user=request.user,
        transaction_date=data.get("transactionDate"),
    )
    return JsonResponse({"ok": True, "entries": [r.pk for r in rows]}, status=201)


@require_POST
@tenant_api
def payment_made_view(request):
    data = _payload(request)
    farmer = get_object_or_404(Farmer.objects.for_tenant(request.tenant), pk=data.get("farmerId"))
    rows = record_payment_made(
        request.tenant,
        farmer.pk,
        data.get("amount"),
        data.get("paymentMethod", "cash"),
        reference_id=data.get("referenceId"),
        user=request.user,
        transaction_date=data.get("transactionDate"),
    )
    return JsonResponse({"ok": True, "entries": [r.pk for r in rows]}, status=201)


@require_GET
def fiscal_year_view(request):
    return JsonResponse({"fiscalYear": get_fiscal_year()})
