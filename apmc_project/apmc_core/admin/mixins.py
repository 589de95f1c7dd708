class TenantAdminMixin:
    """
    Enforce tenant isolation in Django admin.
    Uses request.tenant (set by CurrentTenantMiddleware)
    or falls back to request.user.tenant.
    """

    def _get_request_tenant(self, request):
        # prefer request.tenant (middleware)
        # but fallback to request.user.tenant if present
        tenant = getattr(request, "tenant", None)
        if tenant is None:
            user = getattr(request, "user", None)
            tenant = getattr(user, "tenant", None)
        return tenant

    def get_queryset(self, request):
        qs = super().get_queryset(request)

        # If superuser, show everything;
        # otherwise restrict to the trader's own rows
        if request.user.is_superuser:
            return qs
        tenant = self._get_request_tenant(request)
        if tenant is None:
            # If no tenant available in request, return none
            return qs.none()
        return qs.filter(tenant=tenant)

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        """
        Restrict foreignkey dropdowns to the current tenant.
        Example: farmer on a lot, buyer on a bag.
        """
        tenant = self._get_request_tenant(request)

        if not request.user.is_superuser:
            rel_model = getattr(db_field, "related_model", None)
            if db_field.name == "tenant":
                # only the user's own tenant can be picked
                kwargs["queryset"] = (
                    rel_model.objects.filter(pk=tenant.pk) if tenant else rel_model.objects.none()
                )
            elif rel_model is not None and any(
                f.name == "tenant" for f in rel_model._meta.get_fields()
            ):
                # if related model is tenant-scoped, restrict it to request's tenant
                kwargs["queryset"] = (
                    rel_model.objects.filter(tenant=tenant) if tenant else rel_model.objects.none()
                )

        return super().formfield_for_foreignkey(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        # Ensure object is always owned by the tenant on save (unless superuser)
        if not request.user.is_superuser:
            tenant = self._get_request_tenant(request)
            if tenant is not None:
                obj.tenant = tenant
        super().save_model(request, obj, form, change)
