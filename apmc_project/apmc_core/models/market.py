from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from ..managers import LotManager, TenantManager
from .tenant import Tenant

LOT_STATUS = [
    ("active", "Active"),  # bags still being entered / weighed
    ("completed", "Completed"),  # every bag weighed and price set
    ("cancelled", "Cancelled"),
]

PAYMENT_STATUS = [
    ("pending", "Pending"),
    ("partial", "Partial"),
    ("paid", "Paid"),
]


# ---------- Farmer (seller) ----------
class Farmer(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    name_as_in_bank = models.CharField(max_length=200, blank=True)
    mobile = models.CharField(max_length=20)
    place = models.CharField(max_length=120)
    bank_name = models.CharField(max_length=120, blank=True)
    bank_account_number = models.CharField(max_length=40, blank=True)
    ifsc_code = models.CharField(max_length=20, blank=True)
    account_holder_name = models.CharField(max_length=120, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["tenant", "mobile"], name="ix_farmer_tenant_mobile"),
        ]

    def __str__(self):
        return self.name


# ---------- Buyer (trader / miller) ----------
class Buyer(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    contact_person = models.CharField(max_length=200, blank=True)
    mobile = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    pan_number = models.CharField(max_length=20, blank=True)
    gst_number = models.CharField(max_length=20, blank=True)
    # Mandatory HSN code for billing
    hsn_code = models.CharField(max_length=20)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    def __str__(self):
        return self.name


# ---------- Lot (one farmer's batch of produce) ----------
class Lot(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    lot_number = models.CharField(max_length=50)
    farmer = models.ForeignKey(Farmer, on_delete=models.PROTECT, related_name="lots")
    number_of_bags = models.PositiveIntegerField()
    vehicle_rent = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    advance = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    variety_grade = models.CharField(max_length=120, blank=True)
    grade = models.CharField(max_length=20, blank=True)
    unload_hamali = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    # Bid price in rupees per quintal
    lot_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    # Single-buyer lots carry the buyer here,
    # split lots assign buyers per bag instead
    buyer = models.ForeignKey(
        Buyer, null=True, blank=True, on_delete=models.SET_NULL, related_name="lots"
    )
    status = models.CharField(max_length=10, choices=LOT_STATUS, default="active")
    bill_generated = models.BooleanField(default=False)
    bill_generated_at = models.DateTimeField(null=True, blank=True)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS, default="pending")
    amount_due = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    payment_date = models.DateTimeField(null=True, blank=True)
    # Market day the lot arrived, billing groups lots by this date
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LotManager()

    class Meta:
        constraints = [
            # Lot numbers restart per tenant
            models.UniqueConstraint(
                fields=["tenant", "lot_number"], name="uq_lot_tenant_number"
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "status"], name="ix_lot_tenant_status"),
            models.Index(fields=["tenant", "created_at"], name="ix_lot_tenant_created"),
        ]

    def __str__(self):
        return f"Lot {self.lot_number} [{self.status}]"

    def save(self, *args, **kwargs):
        # Completion is one-way: a completed lot may be cancelled, never reopened
        if self.pk and self.status == "active":
            previous = Lot.objects.filter(pk=self.pk).values_list("status", flat=True).first()
            if previous == "completed":
                raise ValidationError("A completed lot cannot be moved back to active.")
        return super().save(*args, **kwargs)


# ---------- Bag ----------
class Bag(models.Model):
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE)
    lot = models.ForeignKey(Lot, on_delete=models.CASCADE, related_name="bags")
    bag_number = models.PositiveIntegerField()
    # Kilograms, empty until the bag is weighed
    weight = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    # Set when the bag is allocated to one of several buyers of the lot
    buyer = models.ForeignKey(
        Buyer, null=True, blank=True, on_delete=models.SET_NULL, related_name="bags"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["lot", "bag_number"], name="uq_bag_lot_number"
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "buyer"], name="ix_bag_tenant_buyer"),
        ]

    def __str__(self):
        return f"Bag {self.bag_number} of lot {self.lot_id}"

    @property
    def is_weighed(self):
        return self.weight is not None and self.weight > 0
