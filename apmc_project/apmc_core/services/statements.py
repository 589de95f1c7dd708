import logging
from decimal import Decimal

from django.db.models import DecimalField, F, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from ..models import Buyer, Farmer, LedgerEntry, TaxInvoice
from .fiscal import parse_date, resolve_period
from .money import money

logger = logging.getLogger(__name__)

AMOUNT = DecimalField(max_digits=16, decimal_places=2)


# ----------------------------
# Aggregate helpers
# ----------------------------
def _total(expression, **conditions):
    """SUM(expression) over the rows matching `conditions`, 0 when none"""
    return Coalesce(
        Sum(expression, filter=Q(**conditions) if conditions else None, output_field=AMOUNT),
        Decimal("0.00"),
        output_field=AMOUNT,
    )


def _debits(**conditions):
    return _total("debit_amount", **conditions)


def _credits(**conditions):
    return _total("credit_amount", **conditions)


def _debit_balance(**conditions):
    # assets grow on the debit side
    return _total(F("debit_amount") - F("credit_amount"), **conditions)


def _credit_balance(**conditions):
    # liabilities grow on the credit side
    return _total(F("credit_amount") - F("debit_amount"), **conditions)


def _ledger(tenant, start, end):
    return LedgerEntry.objects.for_tenant(tenant).between(start, end)


def _rounded(values):
    return {key: money(value) for key, value in values.items()}


# ----------------------------
# Period statements
# ----------------------------
def generate_profit_loss_report(tenant, fiscal_year=None, start_date=None, end_date=None):
    label, start, end = resolve_period(fiscal_year, start_date, end_date)
    agg = _rounded(_ledger(tenant, start, end).aggregate(
        total_sales=_credits(account_head="sales"),
        total_purchases=_debits(account_head="purchases"),
        commission_income=_credits(account_head="commission_income"),
        service_charges=_credits(account_head="service_charges"),
        total_expenses=_debits(account_head="expenses"),
        # settlements paid out against accounts payable
        farmer_payments=_debits(account_head="accounts_payable"),
    ))

    gross_profit = agg["total_sales"] - agg["total_purchases"]
    total_income = agg["total_sales"] + agg["commission_income"] + agg["service_charges"]
    net_profit = (
        total_income - agg["total_purchases"] - agg["total_expenses"] - agg["farmer_payments"]
    )

    return {
        "fiscalYear": label,
        "periodStartDate": start,
        "periodEndDate": end,
        "totalSales": agg["total_sales"],
        "totalPurchases": agg["total_purchases"],
        "grossProfit": gross_profit,
        "commissionIncome": agg["commission_income"],
        "serviceCharges": agg["service_charges"],
        "totalIncome": total_income,
        "totalExpenses": agg["total_expenses"],
        "farmerPayments": agg["farmer_payments"],
        "netProfit": net_profit,
    }


def generate_balance_sheet(tenant, fiscal_year=None, start_date=None, end_date=None):
    label, start, end = resolve_period(fiscal_year, start_date, end_date)
    agg = _rounded(_ledger(tenant, start, end).aggregate(
        cash=_debit_balance(account_head="cash"),
        bank_balance=_debit_balance(account_head="bank"),
        accounts_receivable=_debit_balance(account_head="accounts_receivable"),
        accounts_payable=_credit_balance(account_head="accounts_payable"),
    ))

    total_assets = agg["cash"] + agg["bank_balance"] + agg["accounts_receivable"]
    total_liabilities = agg["accounts_payable"]

    return {
        "fiscalYear": label,
        "periodStartDate": start,
        "periodEndDate": end,
        "cash": agg["cash"],
        "bankBalance": agg["bank_balance"],
        "accountsReceivable": agg["accounts_receivable"],
        "totalAssets": total_assets,
        "accountsPayable": agg["accounts_payable"],
        "totalLiabilities": total_liabilities,
        "netWorth": total_assets - total_liabilities,
    }


def generate_cash_flow_report(tenant, fiscal_year=None, start_date=None, end_date=None):
    label, start, end = resolve_period(fiscal_year, start_date, end_date)
    agg = _rounded(_ledger(tenant, start, end).aggregate(
        payment_received=_debits(transaction_type="payment_received"),
        other_income=_credits(account_head__in=["commission_income", "service_charges"]),
        payment_made=_credits(transaction_type="payment_made"),
        expenses=_debits(account_head="expenses"),
    ))

    total_in = agg["payment_received"] + agg["other_income"]
    total_out = agg["payment_made"] + agg["expenses"]

    return {
        "fiscalYear": label,
        "periodStartDate": start,
        "periodEndDate": end,
        "cashIn": {
            "paymentReceived": agg["payment_received"],
            "otherIncome": agg["other_income"],
            "total": total_in,
        },
        "cashOut": {
            "paymentMade": agg["payment_made"],
            "expenses": agg["expenses"],
            "total": total_out,
        },
        "netCashFlow": total_in - total_out,
    }


def calculate_gst_liability(tenant, fiscal_year=None, start_date=None, end_date=None):
    """Taxes collected on tax invoices of the period, read from the invoices themselves"""
    label, start, end = resolve_period(fiscal_year, start_date, end_date)
    agg = _rounded(
        TaxInvoice.objects.for_tenant(tenant)
        .filter(invoice_date__gte=start, invoice_date__lte=end)
        .aggregate(
            sgst=_total("sgst"),
            cgst=_total("cgst"),
            cess=_total("cess"),
        )
    )
    total_gst = agg["sgst"] + agg["cgst"]
    return {
        "fiscalYear": label,
        "periodStartDate": start,
        "periodEndDate": end,
        "sgst": agg["sgst"],
        "cgst": agg["cgst"],
        "totalGST": total_gst,
        "cess": agg["cess"],
        "totalTaxLiability": total_gst + agg["cess"],
    }


# ----------------------------
# Profitability by counterparty
# ----------------------------
def analyze_profitability_by_farmer(tenant, fiscal_year=None, start_date=None, end_date=None):
    _, start, end = resolve_period(fiscal_year, start_date, end_date)
    rows = (
        _ledger(tenant, start, end)
        .filter(entity_type="farmer", entity_id__isnull=False)
        .values("entity_id")
        .annotate(
            total_purchases=_debits(account_head="purchases"),
            total_sales=_credits(account_head="sales"),
            commission=_credits(account_head="commission_income"),
        )
        .order_by("entity_id")
    )
    farmers = Farmer.objects.for_tenant(tenant).in_bulk([r["entity_id"] for r in rows])

    result = []
    for row in rows:
        farmer = farmers.get(row["entity_id"])
        if farmer is None:
            # ledger rows of a farmer that no longer exists are left out
            continue
        purchases, sales, commission = (
            money(row["total_purchases"]), money(row["total_sales"]), money(row["commission"])
        )
        result.append({
            "farmerId": farmer.pk,
            "farmerName": farmer.name,
            "totalPurchases": purchases,
            "totalSales": sales,
            "commission": commission,
            "profit": sales - purchases + commission,
        })
    return result


def analyze_profitability_by_buyer(tenant, fiscal_year=None, start_date=None, end_date=None):
    _, start, end = resolve_period(fiscal_year, start_date, end_date)
    rows = (
        _ledger(tenant, start, end)
        .filter(entity_type="buyer", entity_id__isnull=False)
        .values("entity_id")
        .annotate(
            total_sales=_credits(account_head="sales"),
            service_charges=_credits(account_head="service_charges"),
        )
        .order_by("entity_id")
    )
    buyers = Buyer.objects.for_tenant(tenant).in_bulk([r["entity_id"] for r in rows])

    result = []
    for row in rows:
        buyer = buyers.get(row["entity_id"])
        if buyer is None:
            continue
        sales, service = money(row["total_sales"]), money(row["service_charges"])
        result.append({
            "buyerId": buyer.pk,
            "buyerName": buyer.name,
            "totalSales": sales,
            "serviceCharges": service,
            "totalRevenue": sales + service,
        })
    return result


# ----------------------------
# Ledger views (all-time unless bounded)
# ----------------------------
def get_ledger_entries(tenant, start_date=None, end_date=None):
    """Ledger rows newest first, optionally bounded to [start_date, end_date]"""
    qs = LedgerEntry.objects.for_tenant(tenant)
    if start_date and end_date:
        qs = qs.between(parse_date(start_date), parse_date(end_date))
    return [
        {
            "id": entry.pk,
            "date": entry.transaction_date,
            "account": entry.account_head,
            "description": entry.description,
            "debit": entry.debit_amount,
            "credit": entry.credit_amount,
            "reference_type": entry.reference_type,
            "reference_id": entry.reference_id,
            "created_at": entry.created_at,
        }
        for entry in qs.order_by("-transaction_date", "-created_at", "-id")
    ]


def get_balance_sheet_as_of(tenant, as_of_date=None):
    """Cumulative position over every ledger row up to and including as_of_date"""
    as_of = parse_date(as_of_date) if as_of_date else timezone.localdate()
    agg = _rounded(
        LedgerEntry.objects.for_tenant(tenant)
        .filter(transaction_date__lte=as_of)
        .aggregate(
            cash=_debit_balance(account_head="cash"),
            bank_balance=_debit_balance(account_head="bank"),
            accounts_receivable=_debit_balance(account_head="accounts_receivable"),
            inventory=_debit_balance(account_head="inventory"),
            fixed_assets=_debit_balance(account_head="fixed_assets"),
            accounts_payable=_credit_balance(account_head="accounts_payable"),
            gst_payable=_credit_balance(account_head="gst_payable"),
            cess_payable=_credit_balance(account_head="cess_payable"),
            loans=_credit_balance(account_head="loans"),
        )
    )

    assets = {
        key: agg[key]
        for key in ("cash", "bank_balance", "accounts_receivable", "inventory", "fixed_assets")
    }
    assets["total"] = sum(assets.values())
    liabilities = {
        key: agg[key] for key in ("accounts_payable", "gst_payable", "cess_payable", "loans")
    }
    liabilities["total"] = sum(liabilities.values())

    return {
        "assets": assets,
        "liabilities": liabilities,
        "net_worth": assets["total"] - liabilities["total"],
        "as_of_date": as_of,
    }


def get_cash_flow_statement(tenant, start_date=None, end_date=None):
    """Money in and out of the cash and bank heads"""
    qs = LedgerEntry.objects.for_tenant(tenant)
    if start_date and end_date:
        qs = qs.between(parse_date(start_date), parse_date(end_date))
    agg = _rounded(qs.aggregate(
        cash_inflows=_debits(account_head="cash"),
        cash_outflows=_credits(account_head="cash"),
        bank_inflows=_debits(account_head="bank"),
        bank_outflows=_credits(account_head="bank"),
    ))

    net_cash = agg["cash_inflows"] - agg["cash_outflows"]
    net_bank = agg["bank_inflows"] - agg["bank_outflows"]
    return {
        "cash_flows": {
            "cash_inflows": agg["cash_inflows"],
            "cash_outflows": agg["cash_outflows"],
            "net_cash_flow": net_cash,
        },
        "bank_flows": {
            "bank_inflows": agg["bank_inflows"],
            "bank_outflows": agg["bank_outflows"],
            "net_bank_flow": net_bank,
        },
        "total_net_flow": net_cash + net_bank,
    }
