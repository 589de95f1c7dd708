import logging

from ..models import FarmerBill, TaxInvoice
from .fiscal import get_fiscal_year_dates, parse_date, resolve_period
from .money import HUNDRED, ZERO, money
from .statements import generate_balance_sheet

logger = logging.getLogger(__name__)


def _ratio(numerator, denominator):
    return money(numerator / denominator) if denominator else ZERO


def _invoice_rows(tenant, start, end):
    qs = TaxInvoice.objects.for_tenant(tenant).select_related("buyer")
    if start and end:
        qs = qs.filter(invoice_date__gte=start, invoice_date__lte=end)
    return [
        {
            "buyer_id": inv.buyer_id,
            "buyer_name": inv.buyer.name,
            "invoice_number": inv.invoice_number,
            "invoice_date": inv.invoice_date,
            "basic_amount": inv.basic_amount,
            "total_amount": inv.total_amount,
            "sgst": inv.sgst,
            "cgst": inv.cgst,
            "cess": inv.cess,
            "total_taxes_collected": inv.sgst + inv.cgst + inv.cess,
        }
        for inv in qs.order_by("-invoice_date", "-id")
    ]


def _bill_rows(tenant, start, end):
    qs = FarmerBill.objects.for_tenant(tenant).select_related("farmer")
    if start and end:
        qs = qs.filter(bill_date__gte=start, bill_date__lte=end)
    return [
        {
            "farmer_id": bill.farmer_id,
            "farmer_name": bill.farmer.name,
            "patti_number": bill.patti_number,
            "bill_date": bill.bill_date,
            "gross_amount": bill.total_amount,
            "hamali": bill.hamali,
            "vehicle_rent": bill.vehicle_rent,
            "empty_bag_charges": bill.empty_bag_charges,
            "advance": bill.advance,
            "rok": bill.rok,
            "other_deductions": bill.other_charges,
            "net_payable": bill.net_payable,
            "total_deductions": bill.total_amount - bill.net_payable,
            "lot_count": len(bill.lot_ids or []),
        }
        for bill in qs.order_by("-bill_date", "-id")
    ]


def get_trading_details(tenant, start_date=None, end_date=None, fiscal_year=None):
    """
    Trading view built from persisted tax invoices and farmer bills.

    Money in is what buyers were invoiced, money out is what farmers
    are owed. The trader keeps the farmer-bill deductions, which is
    reported as the net profit. Without a range or fiscal year every
    document is included.
    """
    if start_date and end_date:
        start, end = parse_date(start_date), parse_date(end_date)
    elif fiscal_year:
        start, end = get_fiscal_year_dates(fiscal_year)
    else:
        start = end = None

    invoices = _invoice_rows(tenant, start, end)
    bills = _bill_rows(tenant, start, end)

    def total(rows, key):
        return sum((row[key] for row in rows), ZERO)

    cash_inflow = total(invoices, "total_amount")
    cash_outflow = total(bills, "net_payable")
    net_profit = total(bills, "total_deductions")

    breakdown = {
        "hamali": total(bills, "hamali"),
        "vehicle_rent": total(bills, "vehicle_rent"),
        "empty_bags": total(bills, "empty_bag_charges"),
        "advance": total(bills, "advance"),
        "rok_commission": total(bills, "rok"),
        "other": total(bills, "other_deductions"),
        "total": net_profit,
    }
    tax_liability = {
        "sgst_collected": total(invoices, "sgst"),
        "cgst_collected": total(invoices, "cgst"),
        "cess_collected": total(invoices, "cess"),
        "total_tax_liability": total(invoices, "total_taxes_collected"),
    }

    return {
        "summary": {
            "total_cash_inflow": cash_inflow,
            "total_basic_amount": total(invoices, "basic_amount"),
            "total_taxes_collected": tax_liability["total_tax_liability"],
            "total_gst_collected": tax_liability["sgst_collected"] + tax_liability["cgst_collected"],
            "total_cess_collected": tax_liability["cess_collected"],
            "total_cash_outflow": cash_outflow,
            "total_gross_amount": total(bills, "gross_amount"),
            "total_deductions": net_profit,
            "cash_difference": cash_inflow - cash_outflow,
            "net_profit": net_profit,
            "profit_margin_percent": _ratio(net_profit * HUNDRED, cash_inflow),
            "avg_deal_size": _ratio(cash_inflow, len(invoices)),
            "avg_profit_per_transaction": _ratio(net_profit, len(invoices)),
        },
        "trading_margin_breakdown": breakdown,
        "tax_liability": tax_liability,
        "pending_payments": {
            # settlements are not matched against payments yet
            "buyers_pending": ZERO,
            "farmers_pending": ZERO,
            "advance_adjustments": breakdown["advance"],
        },
        "daily_stats": {
            "total_lots_traded": sum(row["lot_count"] for row in bills),
            "total_farmers_paid": len({row["farmer_id"] for row in bills}),
            "total_buyers_invoiced": len({row["buyer_id"] for row in invoices}),
            "avg_profit_per_lot": _ratio(net_profit, len(bills)),
        },
        "buyer_invoices": invoices,
        "farmer_bills": bills,
    }


def _simple_final_accounts(tenant, label, start, end):
    details = get_trading_details(tenant, start, end)
    summary = details["summary"]
    margin = details["trading_margin_breakdown"]
    taxes = details["tax_liability"]

    # cash, bank and receivables still come from the ledger
    position = generate_balance_sheet(tenant, start_date=start, end_date=end)

    total_sales = summary["total_basic_amount"]
    total_purchases = summary["total_cash_outflow"]
    commission_income = margin["rok_commission"]
    service_charges = margin["hamali"] + margin["vehicle_rent"]
    operating_expenses = margin["other"]
    farmer_payments = summary["total_cash_outflow"]

    sgst, cgst, cess = taxes["sgst_collected"], taxes["cgst_collected"], taxes["cess_collected"]
    gst_payable = sgst + cgst
    accounts_payable = abs(position["accountsPayable"])
    total_liabilities = accounts_payable + gst_payable + cess
    total_assets = position["totalAssets"]

    return {
        "fiscalYear": label,
        "periodStartDate": start,
        "periodEndDate": end,
        "totalSales": total_sales,
        "totalPurchases": total_purchases,
        "grossProfit": total_sales - total_purchases,
        "commissionIncome": commission_income,
        "serviceCharges": service_charges,
        "totalIncome": total_sales + commission_income + service_charges,
        "operatingExpenses": operating_expenses,
        "bankCharges": ZERO,
        "farmerPayments": farmer_payments,
        "totalExpenses": operating_expenses + farmer_payments,
        # the trading margin, not the ledger formula
        "netProfit": summary["net_profit"],
        "cash": position["cash"],
        "bankBalance": position["bankBalance"],
        "accountsReceivable": position["accountsReceivable"],
        "totalAssets": total_assets,
        "accountsPayable": accounts_payable,
        "totalLiabilities": total_liabilities,
        "netWorth": total_assets - total_liabilities,
        "gstPayable": gst_payable,
        "cessPayable": cess,
        "gstLiability": {
            "sgst": sgst,
            "cgst": cgst,
            "cess": cess,
            "totalTaxLiability": gst_payable + cess,
        },
    }


def get_simple_final_accounts(tenant, fiscal_year):
    label, start, end = resolve_period(fiscal_year)
    return _simple_final_accounts(tenant, label, start, end)


def get_simple_final_accounts_date_range(tenant, start_date, end_date):
    label, start, end = resolve_period(start_date=start_date, end_date=end_date)
    return _simple_final_accounts(tenant, label, start, end)
