from decimal import Decimal

from django.utils import timezone

from apmc_core.models import Bag, Buyer, Farmer, Lot, Tenant


class MarketFixtureMixin:
    """
    Shared builders for tests.
    Lots are priced only after their bags exist, so the completion
    rule fires once, when the last piece falls into place.
    """

    def make_tenant(self, name="Sri Ganesh Traders", code="APMC-001", slug=None, **gst_settings):
        return Tenant.objects.create(
            name=name,
            slug=slug or code.lower(),
            apmc_code=code,
            mobile_number="9876543210",
            place="Shimoga",
            gst_number="29AAAAA0000A1Z5",
            bank_name="Canara Bank",
            bank_account_number="1234567890",
            ifsc_code="CNRB0000123",
            account_holder_name=name,
            settings={"gstSettings": gst_settings} if gst_settings else {},
        )

    def make_farmer(self, tenant, name="Ramesh", mobile="9000000001"):
        return Farmer.objects.create(tenant=tenant, name=name, mobile=mobile, place="Hosahalli")

    def make_buyer(self, tenant, name="Lakshmi Mills", hsn_code="1006"):
        return Buyer.objects.create(tenant=tenant, name=name, hsn_code=hsn_code)

    def make_lot(
        self,
        tenant,
        farmer,
        lot_number="L-1",
        *,
        buyer=None,
        bags=10,
        kg="50",
        price="2000",
        bag_buyers=None,
        created_at=None,
        **extra,
    ):
        """
        A lot with `bags` bags of `kg` each, priced last.
        `bag_buyers` maps bag number -> Buyer for split lots.
        """
        lot = Lot.objects.create(
            tenant=tenant,
            farmer=farmer,
            lot_number=lot_number,
            number_of_bags=bags,
            buyer=buyer,
            variety_grade="Sona Masuri",
            created_at=created_at or timezone.now(),
            **extra,
        )
        for n in range(1, bags + 1):
            Bag.objects.create(
                tenant=tenant,
                lot=lot,
                bag_number=n,
                weight=Decimal(kg) if kg is not None else None,
                buyer=(bag_buyers or {}).get(n),
            )
        if price is not None:
            lot.lot_price = Decimal(price)
            lot.save()
        lot.refresh_from_db()
        return lot
