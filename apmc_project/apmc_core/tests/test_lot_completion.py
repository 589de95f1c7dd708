from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from apmc_core.models import AuditLog, Bag, Lot
from apmc_core.services import check_and_complete_lot

from .helpers import MarketFixtureMixin


class LotCompletionTests(MarketFixtureMixin, TestCase):

    def setUp(self):
        self.tenant = self.make_tenant()
        self.farmer = self.make_farmer(self.tenant)

    def test_priced_and_fully_weighed_lot_completes(self):
        lot = self.make_lot(self.tenant, self.farmer)
        self.assertEqual(lot.status, "completed")
        # the automatic transition is audited without a user
        self.assertTrue(
            AuditLog.objects.filter(
                action="auto_complete", object_type="Lot", object_id=str(lot.pk), user__isnull=True
            ).exists()
        )

    def test_unpriced_lot_stays_active_until_priced(self):
        lot = self.make_lot(self.tenant, self.farmer, price=None)
        self.assertEqual(lot.status, "active")

        lot.lot_price = Decimal("1800")
        lot.save()
        lot.refresh_from_db()
        self.assertEqual(lot.status, "completed")

    def test_zero_price_does_not_complete(self):
        lot = self.make_lot(self.tenant, self.farmer, price="0")
        self.assertEqual(lot.status, "active")

    def test_one_unweighed_bag_blocks_completion(self):
        lot = self.make_lot(self.tenant, self.farmer, bags=3, price=None)
        Bag.objects.filter(lot=lot, bag_number=3).update(weight=None)
        lot.lot_price = Decimal("2000")
        lot.save()
        lot.refresh_from_db()
        self.assertEqual(lot.status, "active")

        # weighing the last bag completes the lot
        bag = Bag.objects.get(lot=lot, bag_number=3)
        bag.weight = Decimal("48.5")
        bag.save()
        lot.refresh_from_db()
        self.assertEqual(lot.status, "completed")

    def test_zero_weight_counts_as_unweighed(self):
        lot = self.make_lot(self.tenant, self.farmer, bags=2, price=None)
        Bag.objects.filter(lot=lot, bag_number=1).update(weight=Decimal("0"))
        lot.lot_price = Decimal("2000")
        lot.save()
        lot.refresh_from_db()
        self.assertEqual(lot.status, "active")

    def test_lot_without_bags_never_completes(self):
        lot = self.make_lot(self.tenant, self.farmer, bags=0)
        self.assertEqual(lot.status, "active")
        self.assertFalse(check_and_complete_lot(lot.pk, self.tenant.pk))

    def test_check_is_a_no_op_on_completed_lot(self):
        lot = self.make_lot(self.tenant, self.farmer)
        self.assertFalse(check_and_complete_lot(lot.pk, self.tenant.pk))
        self.assertEqual(
            AuditLog.objects.filter(action="auto_complete", object_id=str(lot.pk)).count(), 1
        )

    def test_completion_is_one_way(self):
        lot = self.make_lot(self.tenant, self.farmer)
        lot.status = "active"
        with self.assertRaises(ValidationError):
            lot.save()

        # clearing a bag weight afterwards does not reopen the lot
        Bag.objects.filter(lot=lot).update(weight=None)
        check_and_complete_lot(lot.pk, self.tenant.pk)
        lot.refresh_from_db()
        self.assertEqual(lot.status, "completed")

    def test_completed_lot_can_still_be_cancelled(self):
        lot = self.make_lot(self.tenant, self.farmer)
        lot.status = "cancelled"
        lot.save()
        self.assertEqual(Lot.objects.get(pk=lot.pk).status, "cancelled")

    def test_missing_lot_or_wrong_tenant_is_a_no_op(self):
        lot = self.make_lot(self.tenant, self.farmer, price=None)
        other = self.make_tenant(name="Other", code="APMC-002")
        Lot.objects.filter(pk=lot.pk).update(lot_price=Decimal("2000"))

        self.assertFalse(check_and_complete_lot(lot.pk, other.pk))
        self.assertFalse(check_and_complete_lot(999999, self.tenant.pk))
        self.assertEqual(Lot.objects.get(pk=lot.pk).status, "active")

        self.assertTrue(check_and_complete_lot(lot.pk, self.tenant.pk))
