from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _

from apmc_core.models import Tenant, User

from .actions import regenerate_final_accounts
from .forms import UserAdminChangeForm, UserAdminCreationForm


# Register `Tenant` model in admin with this custom config
@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    """a clean admin table for browsing traders"""

    # columns shown in tenant list view
    list_display = ("id", "name", "apmc_code", "place", "is_active", "created_at")
    search_fields = ("name", "slug", "apmc_code")
    list_filter = ("is_active",)
    ordering = ("name",)  # sort traders alphabetically by default
    actions = [regenerate_final_accounts]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        # a trader only sees its own row
        return qs.filter(pk=getattr(request.user, "tenant_id", None))


# Extend stock `DjangoUserAdmin`
@admin.register(User)  # Hook custom `User` model into Django Admin
class UserAdmin(DjangoUserAdmin):
    # Use custom forms to create/edit views
    add_form = UserAdminCreationForm
    form = UserAdminChangeForm
    model = User

    # fields shown in list
    list_display = ("username", "email", "get_full_name", "role", "tenant", "is_staff")
    list_filter = ("role", "is_staff", "is_superuser", "is_active")
    search_fields = ("username", "email", "first_name", "last_name")
    ordering = ("username",)

    # Group fields logically on edit user page
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (_("Personal info"), {"fields": ("first_name", "last_name", "email", "phone")}),
        (_("Trader"), {"fields": ("tenant", "role")}),
        # Keep stock Django grouping (`permissions`, `important dates`)
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )

    # Control which fields appear when creating a new user in admin
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "tenant", "role", "password1", "password2"),
            },
        ),
    )

    # Tenant scoping: staff only see logins of their own trader
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(tenant_id=request.user.tenant_id)
