import logging
from abc import ABC, abstractmethod

from django.db import transaction

from ..exceptions import FinalAccountsMismatchError
from ..models import FinalAccounts
from .fiscal import get_fiscal_year, resolve_period
from .statements import (
    calculate_gst_liability,
    generate_balance_sheet,
    generate_cash_flow_report,
    generate_profit_loss_report,
)
from .trading import get_simple_final_accounts_date_range

logger = logging.getLogger(__name__)


# ----------------------------
# Net-profit strategies
# ----------------------------
class FinalAccountsStrategy(ABC):
    """One way of computing the statements for a tenant and date window"""

    name = None

    @abstractmethod
    def compute(self, tenant, start, end) -> dict:
        """Return a statement dict that carries at least "netProfit" """


class LedgerFinalAccounts(FinalAccountsStrategy):
    """Profit and loss summed from ledger rows by account head"""

    name = "ledger"

    def compute(self, tenant, start, end):
        return generate_profit_loss_report(tenant, start_date=start, end_date=end)


class TradingFinalAccounts(FinalAccountsStrategy):
    """Statements rebuilt from tax invoices and farmer bills (trading margin)"""

    name = "trading"

    def compute(self, tenant, start, end):
        return get_simple_final_accounts_date_range(tenant, start, end)


def reconcile_final_accounts(
    tenant, fiscal_year=None, start_date=None, end_date=None, strict=False,
    strategies=None,
):
    """
    Run both strategies over the same window and compare net profit.

    A disagreement is logged as a warning, or raised as
    FinalAccountsMismatchError when strict is set.
    """
    label, start, end = resolve_period(fiscal_year, start_date, end_date)
    ledger, trading = strategies or (LedgerFinalAccounts(), TradingFinalAccounts())

    ledger_profit = ledger.compute(tenant, start, end)["netProfit"]
    trading_profit = trading.compute(tenant, start, end)["netProfit"]
    difference = ledger_profit - trading_profit

    result = {
        "period": label,
        "periodStartDate": start,
        "periodEndDate": end,
        f"{ledger.name}NetProfit": ledger_profit,
        f"{trading.name}NetProfit": trading_profit,
        "difference": difference,
        "agrees": difference == 0,
    }

    if not result["agrees"]:
        message = (
            f"Final accounts disagree for tenant {tenant.pk} ({label}): "
            f"{ledger.name}={ledger_profit} {trading.name}={trading_profit} diff={difference}"
        )
        if strict:
            raise FinalAccountsMismatchError(message)
        logger.warning(message)
    return result


# ----------------------------
# Year-end snapshot
# ----------------------------
def generate_final_accounts(tenant, fiscal_year=None):
    """
    Combine P&L, balance sheet, cash flow and GST liability for a fiscal
    year and store them as the tenant's FinalAccounts row for that year.
    Re-running updates the existing row.
    """
    fiscal_year = fiscal_year or get_fiscal_year()
    profit_loss = generate_profit_loss_report(tenant, fiscal_year)
    balance_sheet = generate_balance_sheet(tenant, fiscal_year)
    cash_flow = generate_cash_flow_report(tenant, fiscal_year)
    gst_liability = calculate_gst_liability(tenant, fiscal_year)

    values = {
        # Profit & Loss
        "total_sales": profit_loss["totalSales"],
        "total_purchases": profit_loss["totalPurchases"],
        "gross_profit": profit_loss["grossProfit"],
        "commission_income": profit_loss["commissionIncome"],
        "service_charges": profit_loss["serviceCharges"],
        "total_income": profit_loss["totalIncome"],
        "total_expenses": profit_loss["totalExpenses"],
        "net_profit": profit_loss["netProfit"],
        # Balance Sheet
        "cash": balance_sheet["cash"],
        "bank_balance": balance_sheet["bankBalance"],
        "accounts_receivable": balance_sheet["accountsReceivable"],
        "total_assets": balance_sheet["totalAssets"],
        "accounts_payable": balance_sheet["accountsPayable"],
        "total_liabilities": balance_sheet["totalLiabilities"],
        "net_worth": balance_sheet["netWorth"],
        # Tax Information
        "gst_payable": gst_liability["totalGST"],
        "cess_payable": gst_liability["cess"],
        "period_start_date": profit_loss["periodStartDate"],
        "period_end_date": profit_loss["periodEndDate"],
    }

    with transaction.atomic():
        # Lock the year's row so concurrent regenerations queue up
        snapshot = (
            FinalAccounts.objects.select_for_update()
            .filter(tenant=tenant, fiscal_year=fiscal_year)
            .first()
        )
        if snapshot is None:
            snapshot = FinalAccounts.objects.create(
                tenant=tenant, fiscal_year=fiscal_year, **values
            )
        else:
            for field, value in values.items():
                setattr(snapshot, field, value)
            snapshot.save()

    logger.info(
        "Final accounts %s stored for tenant %s, net profit %s",
        fiscal_year, tenant.pk, snapshot.net_profit,
    )
    return {
        "id": snapshot.pk,
        "fiscalYear": fiscal_year,
        **{_camel(field): value for field, value in values.items()},
        "profitLoss": profit_loss,
        "balanceSheet": balance_sheet,
        "cashFlow": cash_flow,
        "gstLiability": gst_liability,
    }


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
