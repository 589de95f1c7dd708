from django.contrib import admin
from django.core.exceptions import PermissionDenied

from .mixins import TenantAdminMixin

"""Base admin for append-only rows (ledger, audit trail, snapshots)."""
class ReadOnlyAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_per_page = 50  # page size (adjust for performance)

    # make every model field readonly
    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    # Allow viewing the change form (read-only) by returning True here.
    def has_change_permission(self, request, obj=None):
        return True

    # Prevent any attempt to save via the admin UI
    def save_model(self, request, obj, form, change):
        raise PermissionDenied("Rows cannot be changed via the admin.")

    # Disable admin actions like delete_selected
    def get_actions(self, request):
        return {}

    # Common useful filters if present
    def get_list_filter(self, request):
        possible = {f.name for f in self.model._meta.fields}
        return tuple(
            candidate
            for candidate in ("account_head", "transaction_type", "fiscal_year", "action")
            if candidate in possible
        )
