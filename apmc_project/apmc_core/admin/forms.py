from django import forms
from django.contrib.auth.forms import (
    UserChangeForm as DjangoUserChangeForm,
    UserCreationForm as DjangoUserCreationForm)

from apmc_core.models import Bag, User

# -----------------------------
# Register custom admin forms
# ----------------------------


# Subclass `DjangoUserCreationForm` (form used when adding a new user)
class UserAdminCreationForm(DjangoUserCreationForm):
    class Meta(DjangoUserCreationForm.Meta):
        model = User  # Points `model` to custom User model
        fields = ("username", "email", "tenant", "role")


# Subclass `DjangoUserChangeForm` (form used when editing an existing user)
class UserAdminChangeForm(DjangoUserChangeForm):
    class Meta(DjangoUserChangeForm.Meta):
        model = User
        fields = (
            "username",
            "email",
            "is_active",
            "is_staff",
            "is_superuser",
            "tenant",
            "role",
        )


# Inline form for Bag rows under a lot
class BagInlineForm(forms.ModelForm):
    class Meta:
        model = Bag
        exclude = ("tenant",)  # hide tenant from inline form

    def clean(self):
        # bags always belong to their lot's tenant
        lot = getattr(self.instance, "lot", None) if self.instance.lot_id else None
        if lot is not None and not self.instance.tenant_id:
            self.instance.tenant_id = lot.tenant_id
        return super().clean()
