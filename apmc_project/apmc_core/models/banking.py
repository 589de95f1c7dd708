from django.conf import settings
from django.db import models
from ..managers import TenantManager
from .tenant import Tenant

BT_TYPES = [
    ("deposit", "Deposit"),  # money received from a buyer
    ("withdrawal", "Withdrawal"),  # money paid out to a farmer
]


# ---------- Banking ----------
class BankTransaction(
    models.Model
):  # Audit row for every non-cash payment
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    bank_account = models.CharField(max_length=100, default="main")
    transaction_type = models.CharField(max_length=20, choices=BT_TYPES)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    description = models.TextField(blank=True)
    # Business document the movement settles
    reference_type = models.CharField(max_length=50, blank=True)
    reference_id = models.BigIntegerField(null=True, blank=True)
    transaction_date = models.DateField()
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["tenant", "transaction_date"], name="ix_banktx_tenant_date"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0), name="ck_banktx_amount_positive"
            ),
        ]

    def __str__(self):
        return f"{self.transaction_date} {self.transaction_type} {self.amount}"
