from django.conf import settings  # To access global project settings
from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from ..managers import TenantManager
from .tenant import Tenant


# ---------- Audit / Event log ----------
class AuditLog(
    models.Model
):  # Gives accountability and traceability across whole system
    # Associate log entry with a tenant
    # Nullable because some actions are system-wide
    tenant = models.ForeignKey(
        Tenant,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    # Which user performed the action
    # (Nullable for automated actions, e.g. lot auto-completion, Celery jobs)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    # Type of event being logged
    action = models.CharField(
        max_length=50
    )  # e.g. create, auto_complete, record_payment
    # What kind of object was affected
    object_type = models.CharField(
        max_length=100
    )  # (e.g., "FarmerBill", "TaxInvoice", "Lot")
    # The primary key (or identifier) of the object
    object_id = models.CharField(max_length=100)
    # Store details of what changed, in JSON format
    changes = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    # Timestamp when the event was logged
    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # Filter logs quickly
        indexes = [
            models.Index(fields=["tenant", "user"], name="ix_auditlog_tenant_user"),
            models.Index(fields=["tenant", "created_at"], name="ix_auditlog_tenant_created"),
        ]

    def __str__(self):
        time = self.created_at
        return f"[{time:%Y-%m-%d %H:%M}] {self.user} {self.action} {self.object_type}({self.object_id})"

    def clean(self):
        # Ensure the user works for the tenant being logged
        if self.user and self.tenant and not self.user.is_superuser:
            if self.user.tenant_id != self.tenant_id:
                raise ValidationError(
                    "AuditLog.user must belong to AuditLog.tenant"
                )

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)
