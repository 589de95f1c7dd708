import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Sum

from ..models import Expense
from ..models.expense import PAYMENT_METHODS
from .audit_helper import log_action
from .fiscal import parse_date
from .money import ZERO, money, to_decimal
from .recorder import record_expense_transaction

logger = logging.getLogger(__name__)

_PAYMENT_METHODS = {key for key, _ in PAYMENT_METHODS}


@transaction.atomic
def record_expense(
    tenant,
    *,
    category,
    description,
    amount,
    expense_date,
    payment_method="cash",
    subcategory="",
    receipt_number="",
    vendor_name="",
    is_recurring=False,
    user=None,
):
    """
    Save a business expense and post it to the ledger.
    The expense row and its ledger entries commit or roll back together.
    """
    amount = money(to_decimal(amount, "amount"))
    if amount <= ZERO:
        raise ValidationError("Expense amount must be positive.")
    if not category or not description:
        raise ValidationError("Expense category and description are required.")
    if payment_method not in _PAYMENT_METHODS:
        raise ValidationError(f"Unknown payment method {payment_method!r}")

    expense = Expense.objects.create(
        tenant=tenant,
        category=category,
        subcategory=subcategory or "",
        description=description,
        amount=amount,
        payment_method=payment_method,
        receipt_number=receipt_number or "",
        vendor_name=vendor_name or "",
        expense_date=parse_date(expense_date),
        is_recurring=bool(is_recurring),
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )
    record_expense_transaction(expense, user=user)
    log_action(
        action="create",
        instance=expense,
        user=user,
        changes={"category": category, "amount": str(amount), "method": payment_method},
    )
    logger.info("Expense %s recorded for tenant %s: %s", expense.pk, tenant.pk, amount)
    return expense


def _expenses(tenant, start_date=None, end_date=None):
    qs = Expense.objects.for_tenant(tenant)
    if start_date and end_date:
        qs = qs.filter(
            expense_date__gte=parse_date(start_date),
            expense_date__lte=parse_date(end_date),
        )
    return qs


def get_expenses_summary(tenant, start_date=None, end_date=None):
    """Expenses grouped by category and subcategory, with per-category totals"""
    grouped = (
        _expenses(tenant, start_date, end_date)
        .values("category", "subcategory")
        .annotate(total_amount=Sum("amount"), transaction_count=Count("id"))
        .order_by("category", "-total_amount")
    )

    expenses = []
    category_totals = {}
    for row in grouped:
        total = money(row["total_amount"])
        expenses.append({
            "category": row["category"],
            "subcategory": row["subcategory"],
            "total_amount": total,
            "transaction_count": row["transaction_count"],
        })
        category_totals[row["category"]] = category_totals.get(row["category"], ZERO) + total

    return {
        "expenses": expenses,
        "category_totals": category_totals,
        "total_expenses": money(sum(category_totals.values(), ZERO)),
    }


def get_detailed_expenses(tenant, start_date=None, end_date=None):
    return [
        {
            "id": e.pk,
            "date": e.expense_date,
            "category": e.category,
            "subcategory": e.subcategory,
            "description": e.description,
            "amount": e.amount,
            "payment_method": e.payment_method,
            "receipt_number": e.receipt_number,
            "vendor_name": e.vendor_name,
            "created_at": e.created_at,
        }
        for e in _expenses(tenant, start_date, end_date).order_by("-expense_date", "-created_at")
    ]
