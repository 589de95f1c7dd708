from django.db.models.signals import post_save, pre_delete
from django.dispatch import receiver
from django.core.exceptions import ValidationError

from .models import Bag, FarmerBill, Lot, TaxInvoice
from .services.completion import check_and_complete_lot

""" Re-check lot completion whenever a bag weight is written."""


# post_save signal auto-fires right after a Bag row is saved
@receiver(post_save, sender=Bag)
def bag_saved(sender, instance, raw=False, **kwargs):
    if raw:  # skip fixture loading
        return
    check_and_complete_lot(instance.lot_id, instance.tenant_id)


""" Re-check lot completion whenever a lot (and so its price) is written."""


@receiver(post_save, sender=Lot)
def lot_saved(sender, instance, raw=False, **kwargs):
    if raw or instance.status != "active":
        return
    check_and_complete_lot(instance.pk, instance.tenant_id)


"""Block deletion of lots already settled on a bill or invoice."""


@receiver(pre_delete, sender=Lot)
def prevent_delete_billed_lot(sender, instance, **kwargs):
    if instance.bill_generated:
        raise ValidationError("Cannot delete a lot that has been billed.")


"""Block deletion of persisted bills, the ledger references them."""


@receiver(pre_delete, sender=FarmerBill)
@receiver(pre_delete, sender=TaxInvoice)
def prevent_delete_bill(sender, instance, **kwargs):
    raise ValidationError(f"Cannot delete {sender.__name__} {instance.pk}; post a correction instead.")
