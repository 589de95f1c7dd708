from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from ..managers import TenantUserManager


# ---------- Tenant (market trader) ----------
class Tenant(models.Model):

    """A trader operating in an APMC market yard"""
    # Store trader's full display name
    name = models.CharField(max_length=200)

    slug = models.SlugField(  # A URL-friendly identifier
        max_length=80, unique=True  # no two tenants can have the same slug
    )
    # Licence code issued by the market committee
    apmc_code = models.CharField(max_length=50, unique=True)
    mobile_number = models.CharField(max_length=20)
    gst_number = models.CharField(max_length=20, blank=True)
    fssai_number = models.CharField(max_length=20, blank=True)
    pan_number = models.CharField(max_length=20, blank=True)
    place = models.CharField(max_length=120, blank=True)
    address = models.TextField(blank=True)

    # Bank details printed on bills for receiving payments
    bank_name = models.CharField(max_length=120, blank=True)
    bank_account_number = models.CharField(max_length=40, blank=True)
    ifsc_code = models.CharField(max_length=20, blank=True)
    account_holder_name = models.CharField(max_length=120, blank=True)
    branch_name = models.CharField(max_length=120, blank=True)
    branch_address = models.TextField(blank=True)

    is_active = models.BooleanField(default=True)

    # Link to a user account (creator or admin of tenant)
    # declared before `settings` below, which shadows django.conf.settings
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="owned_tenants",
    )

    # Free-form configuration
    """ settings["gstSettings"] holds the per-bag and percentage
    rates read through services.rates.RateSettings """
    settings = models.JSONField(default=dict, blank=True)

    # Store timestamp when the record is first created
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    @property
    def gst_settings(self):
        return (self.settings or {}).get("gstSettings") or {}


# ---------- Custom User ----------
class User(
    AbstractUser
):  # Replace built-in user to attach every login to one tenant
    """
    AUTH_USER_MODEL = "apmc_core.User" must be set in settings.py
    before the first migrate
    """
    ROLE_CHOICES = [
        ("admin", "Admin"),  # can generate bills and record payments
        ("staff", "Staff"),  # weighing and bag entry
    ]

    # Nullable, super admins exist outside any tenant
    tenant = models.ForeignKey(
        Tenant,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="users",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="staff")

    # Optional contact number field, can be left empty in forms
    phone = models.CharField(max_length=32, blank=True)

    objects = TenantUserManager()

    class Meta:
        indexes = [models.Index(fields=["tenant"], name="ix_user_tenant")]

    def __str__(self):
        # Fall back to username if no name is set
        return self.get_full_name() or self.username
