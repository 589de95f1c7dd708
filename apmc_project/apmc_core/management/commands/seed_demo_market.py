import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from apmc_core.exceptions import DuplicateBillError
from apmc_core.models import Bag, Buyer, Farmer, Lot, Tenant
from apmc_core.services import (
    bill_data_from_day_bill,
    create_farmer_bill,
    create_tax_invoice,
    generate_farmer_day_bill,
    generate_final_accounts,
    get_fiscal_year,
)

User = get_user_model()


class Command(BaseCommand):
    help = (
        "Create a demo trader, login, farmers, buyers and one market day of "
        "weighed lots, then bill them and build the year's final accounts."
    )

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument(
            "--trader-name",  # Define flag
            default="Demo Traders",
            help="Name of the demo trader to create.",
        )
        parser.add_argument(
            "--username", default="demo", help="Username for the demo login."
        )
        parser.add_argument(
            "--password", default="demo123", help="Password for the demo login."
        )
        parser.add_argument(
            "--date",
            default=None,
            help="Market day to seed, YYYY-MM-DD (default: today).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        # Read arguments from add_arguments()
        trader_name = options["trader_name"]
        username = options["username"]
        password = options["password"]
        try:
            day = (
                datetime.date.fromisoformat(options["date"])
                if options["date"]
                else timezone.localdate()
            )
        except ValueError:
            raise CommandError(f"Invalid --date {options['date']!r}, expected YYYY-MM-DD")

        # 1. Create trader
        slug = slugify(trader_name) or "trader"
        tenant, created = Tenant.objects.get_or_create(
            slug=slug,
            defaults={
                "name": trader_name,
                "apmc_code": f"APMC-{slug.upper()[:20]}",
                "mobile_number": "9000000000",
                "place": "Demo Market Yard",
                "gst_number": "29ABCDE1234F1Z5",
                "bank_name": "Demo Bank",
                "bank_account_number": "000111222333",
                "ifsc_code": "DEMO0000001",
                "account_holder_name": trader_name,
            },
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"{'Created' if created else 'Reusing'} trader: {tenant}"
            )
        )

        # 2. Create login
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com", "role": "admin"},
        )
        if created:
            user.set_password(password)
        user.tenant = tenant
        user.save()
        if tenant.owner_id is None:
            tenant.owner = user
            tenant.save(update_fields=["owner"])
        self.stdout.write(
            self.style.SUCCESS(f"Login: {user.username} (pw={password})")
        )

        # 3. Create parties
        farmer, _ = Farmer.objects.get_or_create(
            tenant=tenant,
            mobile="9111111111",
            defaults={"name": "Ramesh Gowda", "place": "Hosahalli"},
        )
        buyer, _ = Buyer.objects.get_or_create(
            tenant=tenant,
            name="Sri Lakshmi Mills",
            defaults={"hsn_code": "1006", "mobile": "9222222222"},
        )
        self.stdout.write(self.style.SUCCESS(f"Farmer: {farmer}, buyer: {buyer}"))

        # 4. Create one lot of weighed bags for the day
        lot_number = f"{day:%Y%m%d}-1"
        created_at = timezone.make_aware(datetime.datetime.combine(day, datetime.time(9)))
        lot, created = Lot.objects.get_or_create(
            tenant=tenant,
            lot_number=lot_number,
            defaults={
                "farmer": farmer,
                "buyer": buyer,
                "number_of_bags": 10,
                "variety_grade": "Sona Masuri",
                "grade": "A",
                "created_at": created_at,
            },
        )
        if created:
            for n in range(1, lot.number_of_bags + 1):
                Bag.objects.create(tenant=tenant, lot=lot, bag_number=n, weight=Decimal("50"))
            # pricing the fully weighed lot completes it
            lot.lot_price = Decimal("2000")
            lot.save()
        lot.refresh_from_db()
        self.stdout.write(self.style.SUCCESS(f"Lot {lot.lot_number} is {lot.status}"))

        # 5. Bill both sides of the trade
        day_bill = generate_farmer_day_bill(farmer.pk, day, tenant)
        if day_bill is None:
            self.stdout.write(self.style.WARNING("Nothing billable for the farmer"))
        else:
            try:
                bill = create_farmer_bill(
                    farmer,
                    patti_number=f"P-{day:%Y%m%d}-{farmer.pk:03d}",
                    bill_data=bill_data_from_day_bill(day_bill),
                    lot_ids=[row["lotNumber"] for row in day_bill["lots"]],
                    bill_date=day,
                    user=user,
                )
                self.stdout.write(
                    self.style.SUCCESS(f"Farmer bill {bill.patti_number}, net {bill.net_payable}")
                )
            except DuplicateBillError as exc:
                self.stdout.write(self.style.WARNING(str(exc)))

        try:
            invoice = create_tax_invoice(buyer, date=day, user=user)
        except DuplicateBillError as exc:
            self.stdout.write(self.style.WARNING(str(exc)))
        else:
            if invoice is not None:
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Tax invoice {invoice.invoice_number}, total {invoice.total_amount}"
                    )
                )

        # 6. Year-end snapshot
        accounts = generate_final_accounts(tenant, get_fiscal_year(day))
        self.stdout.write(
            self.style.SUCCESS(
                f"Final accounts {accounts['fiscalYear']}: net profit {accounts['netProfit']}"
            )
        )
        self.stdout.write(self.style.SUCCESS("Demo market setup complete!"))
