import logging

from django.db import DatabaseError, transaction
from django.db.models import Count, Q

from ..models import Lot
from .audit_helper import log_action

logger = logging.getLogger(__name__)


def check_and_complete_lot(lot_id, tenant_id) -> bool:
    """
    Flip a lot to "completed" once every bag is weighed and a price is set.

    No-op for lots that are missing, cancelled, already completed or unpriced.
    The transition is one-way: nothing here ever reopens a lot.
    Returns True only when this call completed the lot.
    """
    try:
        # savepoint, so a failure here leaves the caller's transaction usable
        with transaction.atomic():
            return _complete_if_ready(lot_id, tenant_id)
    except DatabaseError:
        # the lot simply stays open; the next bag or price write retries
        logger.warning("Auto-completion check failed for lot %s", lot_id, exc_info=True)
        return False


def _complete_if_ready(lot_id, tenant_id):
    lot = Lot.objects.filter(pk=lot_id, tenant_id=tenant_id).first()
    if lot is None or lot.status != "active":
        return False
    if lot.lot_price is None or lot.lot_price <= 0:
        return False

    counts = lot.bags.aggregate(
        total=Count("id"),
        # weight IS NOT NULL AND weight > 0
        weighed=Count("id", filter=Q(weight__isnull=False, weight__gt=0)),
    )
    if counts["total"] == 0 or counts["weighed"] != counts["total"]:
        return False

    # queryset update: no post_save, so the Lot signal is not re-entered
    updated = Lot.objects.filter(pk=lot.pk, status="active").update(status="completed")
    if not updated:
        return False

    log_action(
        action="auto_complete",
        instance=lot,
        changes={"status": "completed", "bags": counts["total"]},
    )
    logger.info("Lot %s auto-completed with %s weighed bags", lot.lot_number, counts["total"])
    return True
