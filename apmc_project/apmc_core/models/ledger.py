from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import LedgerManager
from .tenant import Tenant

TRANSACTION_TYPES = [
    ("purchase", "Purchase"),  # farmer bill
    ("sale", "Sale"),  # tax invoice
    ("income", "Income"),
    ("payment_received", "Payment received"),  # from buyers
    ("payment_made", "Payment made"),  # to farmers
    ("expense", "Expense"),
]

ENTITY_TYPES = [
    ("farmer", "Farmer"),
    ("buyer", "Buyer"),
    ("expense", "Expense"),
]

ACCOUNT_HEADS = [
    ("sales", "Sales"),
    ("purchases", "Purchases"),
    ("accounts_receivable", "Accounts receivable"),
    ("accounts_payable", "Accounts payable"),
    ("commission_income", "Commission income"),
    ("service_charges", "Service charges"),
    ("rok_income", "Rok income"),
    ("cash", "Cash"),
    ("bank", "Bank"),
    ("expenses", "Expenses"),
    ("gst_payable", "GST payable"),
    ("cess_payable", "CESS payable"),
    ("inventory", "Inventory"),
    ("fixed_assets", "Fixed assets"),
    ("loans", "Loans"),
]


# ---------- Ledger Store ----------
class LedgerEntry(models.Model):  # One side of a double-entry posting
    # Multi-tenant: every entry belongs to a tenant
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPES)
    # Counterparty of the business event
    entity_type = models.CharField(max_length=10, choices=ENTITY_TYPES)
    entity_id = models.BigIntegerField(null=True, blank=True)
    # Business document that produced the entry (farmer_bill, tax_invoice, ...)
    reference_type = models.CharField(max_length=50)
    reference_id = models.BigIntegerField(null=True, blank=True)
    debit_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    credit_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    description = models.TextField(blank=True)
    account_head = models.CharField(max_length=30, choices=ACCOUNT_HEADS)
    # "YYYY-YYYY+1", derived from transaction_date
    fiscal_year = models.CharField(max_length=9)
    transaction_date = models.DateField()
    # Track user who recorded it
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = LedgerManager()

    class Meta:
        verbose_name_plural = "ledger entries"
        ordering = ["-transaction_date", "-id"]
        indexes = [
            models.Index(fields=["tenant", "account_head", "transaction_date"], name="ix_ledger_tenant_head_date"),
            models.Index(fields=["tenant", "fiscal_year"], name="ix_ledger_tenant_fy"),
            models.Index(fields=["tenant", "entity_type", "entity_id"], name="ix_ledger_tenant_entity"),
        ]
        constraints = [
            # Amounts are never negative, direction comes from the column
            models.CheckConstraint(
                condition=models.Q(debit_amount__gte=0), name="ck_ledger_debit_non_negative"
            ),
            models.CheckConstraint(
                condition=models.Q(credit_amount__gte=0), name="ck_ledger_credit_non_negative"
            ),
        ]

    def __str__(self):
        return (
            f"{self.transaction_date} {self.account_head} "
            f"Dr {self.debit_amount} Cr {self.credit_amount}"
        )

    def clean(self):
        if self.debit_amount < 0 or self.credit_amount < 0:
            raise ValidationError("Ledger amounts must be non-negative.")

    # Append-only: corrections are made with offsetting entries
    def save(self, *args, **kwargs):
        if self.pk and LedgerEntry.objects.filter(pk=self.pk).exists():
            raise ValidationError("Ledger entries are immutable once written.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Ledger entries cannot be deleted.")
