from django.contrib import admin

from apmc_core.models import Bag, Buyer, Farmer, Lot

from .actions import recheck_lot_completion
from .inlines import BagInline
from .mixins import TenantAdminMixin


@admin.register(Farmer)
class FarmerAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("id", "name", "mobile", "place", "bank_name", "created_at")
    search_fields = ("name", "mobile", "place")
    ordering = ("name",)


@admin.register(Buyer)
class BuyerAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("id", "name", "contact_person", "mobile", "gst_number", "hsn_code")
    search_fields = ("name", "contact_person", "gst_number")
    ordering = ("name",)


@admin.register(Lot)
class LotAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = (
        "lot_number",
        "farmer",
        "number_of_bags",
        "lot_price",
        "buyer",
        "status",
        "bill_generated",
        "created_at",
    )
    list_filter = ("status", "bill_generated", "payment_status")
    search_fields = ("lot_number", "farmer__name", "buyer__name")
    # status moves by itself once every bag is weighed
    readonly_fields = ("bill_generated", "bill_generated_at", "amount_due")
    inlines = [BagInline]
    actions = [recheck_lot_completion]

    # Fetch everything in one SQL join
    def get_queryset(self, request):
        return super().get_queryset(request).select_related("farmer", "buyer")

    def save_formset(self, request, form, formset, change):
        # New bags inherit the lot's tenant
        bags = formset.save(commit=False)
        for bag in bags:
            bag.tenant_id = form.instance.tenant_id
            bag.save()
        for obj in formset.deleted_objects:
            obj.delete()
        formset.save_m2m()


@admin.register(Bag)
class BagAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ("id", "lot", "bag_number", "weight", "buyer")
    list_filter = ("lot__status",)
    search_fields = ("lot__lot_number",)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("lot", "buyer")
