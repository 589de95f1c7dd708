from django.conf import settings
from django.db import models
from ..managers import TenantManager
from .tenant import Tenant

PAYMENT_METHODS = [
    # Keeps payment method standardized across expenses and payments
    ("cash", "Cash"),
    ("bank", "Bank"),
    ("cheque", "Cheque"),
    ("upi", "UPI"),
    ("bank_transfer", "Bank Transfer"),
]


# ---------- Business expense ----------
class Expense(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    category = models.CharField(max_length=100)  # e.g. "office", "labour", "transport"
    subcategory = models.CharField(max_length=100, blank=True)
    description = models.TextField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHODS, default="cash")
    receipt_number = models.CharField(max_length=100, blank=True)
    vendor_name = models.CharField(max_length=200, blank=True)
    expense_date = models.DateField()
    is_recurring = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["tenant", "expense_date"], name="ix_expense_tenant_date"),
            models.Index(fields=["tenant", "category"], name="ix_expense_tenant_category"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0), name="ck_expense_amount_positive"
            ),
        ]

    def __str__(self):
        return f"{self.expense_date} {self.category} {self.amount}"
