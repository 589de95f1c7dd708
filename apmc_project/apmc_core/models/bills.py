from decimal import Decimal
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from ..managers import TenantManager
from .market import Buyer, Farmer
from .tenant import Tenant

ZERO = Decimal("0.00")


def money_field(**kwargs):
    kwargs.setdefault("default", ZERO)
    return models.DecimalField(max_digits=14, decimal_places=2, **kwargs)


# ---------- Farmer bill (patti) ----------
class FarmerBill(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    # Settlement number handed to the farmer
    patti_number = models.CharField(max_length=50)
    farmer = models.ForeignKey(Farmer, on_delete=models.PROTECT, related_name="bills")
    bill_date = models.DateField()
    # Gross value of produce before deductions
    total_amount = money_field()
    # Deductions
    hamali = money_field()
    vehicle_rent = money_field()
    empty_bag_charges = money_field()
    advance = money_field()
    rok = money_field()
    other_charges = money_field()
    total_deductions = money_field()
    net_payable = money_field()
    total_bags = models.PositiveIntegerField(default=0)
    total_weight = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)
    # Lot numbers settled by this bill
    lot_ids = models.JSONField(default=list)
    # Full computed document, stored for reprinting
    bill_data = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "patti_number"], name="uq_farmerbill_tenant_patti"
            ),
            # Idempotency key: one settlement per farmer per day
            models.UniqueConstraint(
                fields=["tenant", "farmer", "bill_date"], name="uq_farmerbill_farmer_day"
            ),
        ]
        indexes = [models.Index(fields=["tenant", "bill_date"], name="ix_farmerbill_tenant_date")]

    def __str__(self):
        return f"Patti {self.patti_number} ({self.farmer_id}) net {self.net_payable}"


# ---------- Tax invoice (buyer) ----------
class TaxInvoice(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    # INV-YYYYMMDD-BBB
    invoice_number = models.CharField(max_length=50)
    buyer = models.ForeignKey(Buyer, on_delete=models.PROTECT, related_name="tax_invoices")
    invoice_date = models.DateField()
    basic_amount = money_field()
    packaging = money_field()
    hamali = money_field()
    weighing_charges = money_field()
    commission = money_field()
    cess = money_field()
    sgst = money_field()
    cgst = money_field()
    igst = money_field()
    total_gst = money_field()
    total_amount = money_field()
    # Lot numbers invoiced, used to skip lots already billed that day
    lot_ids = models.JSONField(default=list)
    invoice_data = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "invoice_number"], name="uq_taxinvoice_tenant_number"
            ),
            # Idempotency key: one invoice per buyer per day
            models.UniqueConstraint(
                fields=["tenant", "buyer", "invoice_date"], name="uq_taxinvoice_buyer_day"
            ),
        ]
        indexes = [models.Index(fields=["tenant", "invoice_date"], name="ix_taxinvoice_tenant_date")]

    def __str__(self):
        return f"{self.invoice_number} total {self.total_amount}"
