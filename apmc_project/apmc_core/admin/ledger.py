from django.contrib import admin

from apmc_core.models import AuditLog, BankTransaction, FinalAccounts, LedgerEntry

from .readonly import ReadOnlyAdmin


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdmin):
    list_display = (
        "transaction_date",
        "account_head",
        "transaction_type",
        "entity_type",
        "entity_id",
        "debit_amount",
        "credit_amount",
        "reference_type",
        "reference_id",
    )
    search_fields = ("description", "reference_type")
    date_hierarchy = "transaction_date"


@admin.register(BankTransaction)
class BankTransactionAdmin(ReadOnlyAdmin):
    list_display = ("transaction_date", "bank_account", "transaction_type", "amount", "reference_type")


# Register `AuditLog` model
@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = (
        "id",
        "tenant",
        "user",
        "action",
        "object_type",
        "object_id",
        "created_at",
    )
    search_fields = ("object_type", "object_id", "user__username")

    # Fetch everything in one SQL join
    def get_queryset(self, request):
        return super().get_queryset(request).select_related("tenant", "user")


@admin.register(FinalAccounts)
class FinalAccountsAdmin(ReadOnlyAdmin):
    list_display = (
        "tenant", "fiscal_year", "total_income", "net_profit", "net_worth", "updated_at",
    )

