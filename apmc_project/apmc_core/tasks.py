from celery import shared_task


@shared_task  # register this function as a Celery task
def generate_final_accounts_task(tenant_id, fiscal_year=None):
    # import lazily to avoid circular imports at module import time
    from .models import Tenant
    from .services.final_accounts import generate_final_accounts

    tenant = Tenant.objects.get(pk=tenant_id)
    # Returns the snapshot id, the full statements stay in the database
    return generate_final_accounts(tenant, fiscal_year)["id"]


@shared_task
def generate_all_final_accounts(fiscal_year=None):
    from .models import Tenant

    # Fan out one task per active trader
    tenant_ids = list(Tenant.objects.filter(is_active=True).values_list("id", flat=True))
    for tenant_id in tenant_ids:
        generate_final_accounts_task.delay(tenant_id, fiscal_year)
    return len(tenant_ids)
