from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _

from apmc_core.services.completion import check_and_complete_lot
from apmc_core.services.final_accounts import generate_final_accounts

# ---------- Admin actions ----------


@admin.action(description="Re-check completion of selected lots")
def recheck_lot_completion(modeladmin, request, queryset):
    """
    Run the auto-completion rule again for each selected active lot,
    e.g. after bags were fixed through a bulk import.
    """
    completed = 0
    for lot in queryset.filter(status="active"):
        if check_and_complete_lot(lot.pk, lot.tenant_id):
            completed += 1
    modeladmin.message_user(
        request,
        _("%(count)d lot(s) moved to completed.") % {"count": completed},
        level=messages.SUCCESS,
    )


@admin.action(description="Regenerate final accounts for the current fiscal year")
def regenerate_final_accounts(modeladmin, request, queryset):
    """Rebuild the FinalAccounts snapshot of each selected tenant"""
    success = 0
    for tenant in queryset:
        try:
            generate_final_accounts(tenant)
            success += 1
        except (ValidationError, DatabaseError) as exc:
            modeladmin.message_user(
                request,
                _("Could not regenerate final accounts for %(name)s: %(err)s")
                % {"name": tenant.name, "err": exc},
                level=messages.ERROR,
            )
    # Final summary message
    modeladmin.message_user(
        request,
        _("Regenerated final accounts for %(success)d of %(total)d tenant(s).")
        % {"success": success, "total": queryset.count()},
        level=messages.INFO,
    )
