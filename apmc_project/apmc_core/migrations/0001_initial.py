import decimal

import apmc_core.managers
import django.contrib.auth.validators
import django.core.serializers.json
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=80, unique=True)),
                ("apmc_code", models.CharField(max_length=50, unique=True)),
                ("mobile_number", models.CharField(max_length=20)),
                ("gst_number", models.CharField(blank=True, max_length=20)),
                ("fssai_number", models.CharField(blank=True, max_length=20)),
                ("pan_number", models.CharField(blank=True, max_length=20)),
                ("place", models.CharField(blank=True, max_length=120)),
                ("address", models.TextField(blank=True)),
                ("bank_name", models.CharField(blank=True, max_length=120)),
                ("bank_account_number", models.CharField(blank=True, max_length=40)),
                ("ifsc_code", models.CharField(blank=True, max_length=20)),
                ("account_holder_name", models.CharField(blank=True, max_length=120)),
                ("branch_name", models.CharField(blank=True, max_length=120)),
                ("branch_address", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("settings", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("username", models.CharField(error_messages={"unique": "A user with that username already exists."}, help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.", max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name="username")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("role", models.CharField(choices=[("admin", "Admin"), ("staff", "Staff")], default="staff", max_length=20)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
                ("tenant", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="users", to="apmc_core.tenant")),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
                "indexes": [models.Index(fields=["tenant"], name="ix_user_tenant")],
            },
            managers=[
                ("objects", apmc_core.managers.TenantUserManager()),
            ],
        ),
        migrations.AddField(
            model_name="tenant",
            name="owner",
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="owned_tenants", to=settings.AUTH_USER_MODEL),
        ),
        migrations.CreateModel(
            name="Farmer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("name_as_in_bank", models.CharField(blank=True, max_length=200)),
                ("mobile", models.CharField(max_length=20)),
                ("place", models.CharField(max_length=120)),
                ("bank_name", models.CharField(blank=True, max_length=120)),
                ("bank_account_number", models.CharField(blank=True, max_length=40)),
                ("ifsc_code", models.CharField(blank=True, max_length=20)),
                ("account_holder_name", models.CharField(blank=True, max_length=120)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [models.Index(fields=["tenant", "mobile"], name="ix_farmer_tenant_mobile")],
            },
        ),
        migrations.CreateModel(
            name="Buyer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("contact_person", models.CharField(blank=True, max_length=200)),
                ("mobile", models.CharField(blank=True, max_length=20)),
                ("address", models.TextField(blank=True)),
                ("pan_number", models.CharField(blank=True, max_length=20)),
                ("gst_number", models.CharField(blank=True, max_length=20)),
                ("hsn_code", models.CharField(max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
        ),
        migrations.CreateModel(
            name="Lot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("lot_number", models.CharField(max_length=50)),
                ("number_of_bags", models.PositiveIntegerField()),
                ("vehicle_rent", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("advance", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("variety_grade", models.CharField(blank=True, max_length=120)),
                ("grade", models.CharField(blank=True, max_length=20)),
                ("unload_hamali", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("lot_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("completed", "Completed"), ("cancelled", "Cancelled")], default="active", max_length=10)),
                ("bill_generated", models.BooleanField(default=False)),
                ("bill_generated_at", models.DateTimeField(blank=True, null=True)),
                ("payment_status", models.CharField(choices=[("pending", "Pending"), ("partial", "Partial"), ("paid", "Paid")], default="pending", max_length=10)),
                ("amount_due", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("buyer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="lots", to="apmc_core.buyer")),
                ("farmer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="lots", to="apmc_core.farmer")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["tenant", "status"], name="ix_lot_tenant_status"),
                    models.Index(fields=["tenant", "created_at"], name="ix_lot_tenant_created"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=["tenant", "lot_number"], name="uq_lot_tenant_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Bag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("bag_number", models.PositiveIntegerField()),
                ("weight", models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("buyer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bags", to="apmc_core.buyer")),
                ("lot", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bags", to="apmc_core.lot")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [models.Index(fields=["tenant", "buyer"], name="ix_bag_tenant_buyer")],
                "constraints": [
                    models.UniqueConstraint(fields=["lot", "bag_number"], name="uq_bag_lot_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("transaction_type", models.CharField(choices=[("purchase", "Purchase"), ("sale", "Sale"), ("income", "Income"), ("payment_received", "Payment received"), ("payment_made", "Payment made"), ("expense", "Expense")], max_length=20)),
                ("entity_type", models.CharField(choices=[("farmer", "Farmer"), ("buyer", "Buyer"), ("expense", "Expense")], max_length=10)),
                ("entity_id", models.BigIntegerField(blank=True, null=True)),
                ("reference_type", models.CharField(max_length=50)),
                ("reference_id", models.BigIntegerField(blank=True, null=True)),
                ("debit_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("credit_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("description", models.TextField(blank=True)),
                ("account_head", models.CharField(choices=[("sales", "Sales"), ("purchases", "Purchases"), ("accounts_receivable", "Accounts receivable"), ("accounts_payable", "Accounts payable"), ("commission_income", "Commission income"), ("service_charges", "Service charges"), ("rok_income", "Rok income"), ("cash", "Cash"), ("bank", "Bank"), ("expenses", "Expenses"), ("gst_payable", "GST payable"), ("cess_payable", "CESS payable"), ("inventory", "Inventory"), ("fixed_assets", "Fixed assets"), ("loans", "Loans")], max_length=30)),
                ("fiscal_year", models.CharField(max_length=9)),
                ("transaction_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "verbose_name_plural": "ledger entries",
                "ordering": ["-transaction_date", "-id"],
                "indexes": [
                    models.Index(fields=["tenant", "account_head", "transaction_date"], name="ix_ledger_tenant_head_date"),
                    models.Index(fields=["tenant", "fiscal_year"], name="ix_ledger_tenant_fy"),
                    models.Index(fields=["tenant", "entity_type", "entity_id"], name="ix_ledger_tenant_entity"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("debit_amount__gte", 0)), name="ck_ledger_debit_non_negative"),
                    models.CheckConstraint(condition=models.Q(("credit_amount__gte", 0)), name="ck_ledger_credit_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FarmerBill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("patti_number", models.CharField(max_length=50)),
                ("bill_date", models.DateField()),
                ("total_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("hamali", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("vehicle_rent", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("empty_bag_charges", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("advance", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("rok", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("other_charges", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("total_deductions", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("net_payable", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("total_bags", models.PositiveIntegerField(default=0)),
                ("total_weight", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("lot_ids", models.JSONField(default=list)),
                ("bill_data", models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("farmer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="bills", to="apmc_core.farmer")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [models.Index(fields=["tenant", "bill_date"], name="ix_farmerbill_tenant_date")],
                "constraints": [
                    models.UniqueConstraint(fields=["tenant", "patti_number"], name="uq_farmerbill_tenant_patti"),
                    models.UniqueConstraint(fields=["tenant", "farmer", "bill_date"], name="uq_farmerbill_farmer_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TaxInvoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invoice_number", models.CharField(max_length=50)),
                ("invoice_date", models.DateField()),
                ("basic_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("packaging", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("hamali", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("weighing_charges", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("commission", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("cess", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("sgst", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("cgst", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("igst", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("total_gst", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=14)),
                ("lot_ids", models.JSONField(default=list)),
                ("invoice_data", models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("buyer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="tax_invoices", to="apmc_core.buyer")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [models.Index(fields=["tenant", "invoice_date"], name="ix_taxinvoice_tenant_date")],
                "constraints": [
                    models.UniqueConstraint(fields=["tenant", "invoice_number"], name="uq_taxinvoice_tenant_number"),
                    models.UniqueConstraint(fields=["tenant", "buyer", "invoice_date"], name="uq_taxinvoice_buyer_day"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(max_length=100)),
                ("subcategory", models.CharField(blank=True, max_length=100)),
                ("description", models.TextField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("payment_method", models.CharField(choices=[("cash", "Cash"), ("bank", "Bank"), ("cheque", "Cheque"), ("upi", "UPI"), ("bank_transfer", "Bank Transfer")], default="cash", max_length=20)),
                ("receipt_number", models.CharField(blank=True, max_length=100)),
                ("vendor_name", models.CharField(blank=True, max_length=200)),
                ("expense_date", models.DateField()),
                ("is_recurring", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [
                    models.Index(fields=["tenant", "expense_date"], name="ix_expense_tenant_date"),
                    models.Index(fields=["tenant", "category"], name="ix_expense_tenant_category"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="ck_expense_amount_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BankTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("bank_account", models.CharField(default="main", max_length=100)),
                ("transaction_type", models.CharField(choices=[("deposit", "Deposit"), ("withdrawal", "Withdrawal")], max_length=20)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("description", models.TextField(blank=True)),
                ("reference_type", models.CharField(blank=True, max_length=50)),
                ("reference_id", models.BigIntegerField(blank=True, null=True)),
                ("transaction_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "indexes": [models.Index(fields=["tenant", "transaction_date"], name="ix_banktx_tenant_date")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="ck_banktx_amount_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FinalAccounts",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fiscal_year", models.CharField(max_length=9)),
                ("total_sales", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("total_purchases", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("gross_profit", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("commission_income", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("service_charges", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("total_income", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("total_expenses", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("net_profit", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("cash", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("bank_balance", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("accounts_receivable", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("total_assets", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("accounts_payable", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("total_liabilities", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("net_worth", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("gst_payable", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("cess_payable", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=16)),
                ("period_start_date", models.DateField()),
                ("period_end_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="apmc_core.tenant")),
            ],
            options={
                "verbose_name_plural": "final accounts",
                "constraints": [
                    models.UniqueConstraint(fields=["tenant", "fiscal_year"], name="uq_finalaccounts_tenant_year"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("tenant", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to="apmc_core.tenant")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["tenant", "user"], name="ix_auditlog_tenant_user"),
                    models.Index(fields=["tenant", "created_at"], name="ix_auditlog_tenant_created"),
                ],
            },
        ),
    ]
