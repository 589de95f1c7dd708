from decimal import Decimal
from django.db import models
from ..managers import TenantManager
from .tenant import Tenant

ZERO = Decimal("0.00")


def money_field():
    return models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)


# ---------- Year-end snapshot ----------
class FinalAccounts(models.Model):
    """Stored result of generate_final_accounts for one fiscal year"""
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    fiscal_year = models.CharField(max_length=9)

    # Profit & Loss
    total_sales = money_field()
    total_purchases = money_field()
    gross_profit = money_field()
    commission_income = money_field()
    service_charges = money_field()
    total_income = money_field()
    total_expenses = money_field()
    net_profit = money_field()

    # Balance Sheet
    cash = money_field()
    bank_balance = money_field()
    accounts_receivable = money_field()
    total_assets = money_field()
    accounts_payable = money_field()
    total_liabilities = money_field()
    net_worth = money_field()

    # Tax Information
    gst_payable = money_field()
    cess_payable = money_field()

    period_start_date = models.DateField()
    period_end_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        verbose_name_plural = "final accounts"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "fiscal_year"], name="uq_finalaccounts_tenant_year"
            ),
        ]

    def __str__(self):
        return f"{self.tenant} {self.fiscal_year} net {self.net_profit}"
