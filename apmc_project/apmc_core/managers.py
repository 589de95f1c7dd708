from django.db import models
from django.contrib.auth.models import UserManager

# -----------------------------------------
# Enforce tenant scoping across all models
# that belong to a tenant (market trader)
# -----------------------------------------
# Define subclass of Django’s QuerySet
class TenantQuerySet(models.QuerySet):
    def for_tenant(self, tenant):         # Add queryset helper
        return self.filter(tenant=tenant)  # Apply filter
    # Enables query:
    # Farmer.objects.for_tenant(request.tenant)


# Attach TenantQuerySet to .objects
class TenantManager(models.Manager):

    def get_queryset(self):  # ensure every model gets TenantQuerySet(so .for_tenant() is always available)
        return TenantQuerySet(self.model, using=self._db)

    def for_tenant(self, tenant):  # can call for_tenant() directly on objects
        return self.get_queryset().for_tenant(tenant)


# User keeps Django's create_user/create_superuser and gains tenant scoping
class TenantUserManager(UserManager):

    use_in_migrations = True  # Allow Django to serialize this manager in migrations

    def get_queryset(self):
        return TenantQuerySet(self.model, using=self._db)

    def for_tenant(self, tenant):
        return self.get_queryset().for_tenant(tenant)


# Lots that billing and reporting may look at
class LotQuerySet(TenantQuerySet):
    def completed(self):
        return self.filter(status="completed")

    def priced(self):
        # lot_price IS NOT NULL AND lot_price > 0
        return self.filter(lot_price__isnull=False, lot_price__gt=0)

    def created_on(self, day):
        # calendar day in the active time zone
        return self.filter(created_at__date=day)

    def billable_on(self, tenant, day):
        return self.for_tenant(tenant).completed().priced().created_on(day)


class LotManager(TenantManager):
    def get_queryset(self):
        return LotQuerySet(self.model, using=self._db)

    def billable_on(self, tenant, day):
        return self.get_queryset().billable_on(tenant, day)


# Ledger rows for one tenant inside a date window
class LedgerQuerySet(TenantQuerySet):
    def between(self, start_date, end_date):
        return self.filter(
            transaction_date__gte=start_date,
            transaction_date__lte=end_date,
        )


class LedgerManager(TenantManager):
    def get_queryset(self):
        return LedgerQuerySet(self.model, using=self._db)
