from django.contrib import admin

from apmc_core.models import Expense, FarmerBill, TaxInvoice

from .mixins import TenantAdminMixin


class IssuedDocumentAdmin(TenantAdminMixin, admin.ModelAdmin):
    """Issued pattis and invoices are viewed here, never edited or deleted"""

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        # created through the billing endpoints only
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(FarmerBill)
class FarmerBillAdmin(IssuedDocumentAdmin):
    list_display = (
        "patti_number", "farmer", "bill_date", "total_amount", "total_deductions", "net_payable",
    )
    list_filter = ("bill_date",)
    search_fields = ("patti_number", "farmer__name")
    date_hierarchy = "bill_date"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("farmer")


@admin.register(TaxInvoice)
class TaxInvoiceAdmin(IssuedDocumentAdmin):
    list_display = (
        "invoice_number", "buyer", "invoice_date", "basic_amount", "total_gst", "total_amount",
    )
    list_filter = ("invoice_date",)
    search_fields = ("invoice_number", "buyer__name")
    date_hierarchy = "invoice_date"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("buyer")


@admin.register(Expense)
class ExpenseAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("expense_date", "category", "subcategory", "amount", "payment_method")
    list_filter = ("category", "payment_method")
    search_fields = ("description", "vendor_name", "receipt_number")

    def has_add_permission(self, request):
        # expenses must go through record_expense so the ledger sees them
        return False
