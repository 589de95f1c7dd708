from django.contrib import admin

from apmc_core.models import Bag

from .forms import BagInlineForm
from .mixins import TenantAdminMixin

# ---------- Helpful inline admin classes ----------


class BagInline(
    TenantAdminMixin,
    admin.TabularInline
    # shows related objects in table format (rows under parent form)
):
    """Show Bag rows on the Lot page, for weighing and buyer allocation"""

    model = Bag
    form = BagInlineForm
    extra = 0  # don’t show “empty” rows by default (prevents clutter)
    fields = ("bag_number", "weight", "buyer", "notes")
    ordering = ("bag_number",)
