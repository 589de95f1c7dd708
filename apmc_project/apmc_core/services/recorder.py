import logging
from typing import Dict, List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from ..exceptions import UnbalancedLedgerError
from ..models import BankTransaction, LedgerEntry
from ..models.ledger import ACCOUNT_HEADS, ENTITY_TYPES, TRANSACTION_TYPES
from .audit_helper import log_action
from .fiscal import get_fiscal_year, parse_date
from .money import ZERO, money, to_decimal

logger = logging.getLogger(__name__)

_TRANSACTION_TYPES = {key for key, _ in TRANSACTION_TYPES}
_ENTITY_TYPES = {key for key, _ in ENTITY_TYPES}
_ACCOUNT_HEADS = {key for key, _ in ACCOUNT_HEADS}


# ----------------------------
# Single ledger rows
# ----------------------------
def _build_entry(
    tenant,
    transaction_type,
    entity_type,
    entity_id,
    reference_type,
    reference_id,
    debit_amount,
    credit_amount,
    description,
    account_head,
    user=None,
    transaction_date=None,
):
    """Validate and return an unsaved LedgerEntry"""
    if transaction_type not in _TRANSACTION_TYPES:
        raise ValidationError(f"Unknown transaction type {transaction_type!r}")
    if entity_type not in _ENTITY_TYPES:
        raise ValidationError(f"Unknown entity type {entity_type!r}")
    if account_head not in _ACCOUNT_HEADS:
        raise ValidationError(f"Unknown account head {account_head!r}")

    debit = money(to_decimal(debit_amount, "debit_amount"))
    credit = money(to_decimal(credit_amount, "credit_amount"))
    if debit < ZERO or credit < ZERO:
        raise ValidationError("Ledger amounts must be non-negative.")

    day = parse_date(transaction_date) if transaction_date else timezone.localdate()

    return LedgerEntry(
        tenant=tenant,
        transaction_type=transaction_type,
        entity_type=entity_type,
        entity_id=entity_id,
        reference_type=reference_type,
        reference_id=reference_id,
        debit_amount=debit,
        credit_amount=credit,
        description=description or "",
        account_head=account_head,
        # fiscal year follows the transaction date, not the wall clock
        fiscal_year=get_fiscal_year(day),
        transaction_date=day,
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )


def record_transaction(
    tenant,
    transaction_type,
    entity_type,
    entity_id,
    reference_type,
    reference_id,
    debit_amount,
    credit_amount,
    description,
    account_head,
    user=None,
    transaction_date=None,
) -> LedgerEntry:
    """
    Append exactly one ledger row.
    Balance across rows is the caller's job; composite events
    go through record_balanced_entries instead.
    """
    entry = _build_entry(
        tenant, transaction_type, entity_type, entity_id, reference_type,
        reference_id, debit_amount, credit_amount, description, account_head,
        user=user, transaction_date=transaction_date,
    )
    entry.save()
    return entry


# ----------------------------
# Composite (double-entry) postings
# ----------------------------
def record_balanced_entries(
    tenant, entries: List[Dict], *, user=None, allow_imbalance=False
) -> List[LedgerEntry]:
    """
    Write the ledger rows of one business event as a single atomic unit.

    Every dict in `entries` carries the keyword arguments of
    record_transaction (minus tenant/user). Debits must equal credits
    unless allow_imbalance is set, in which case the difference is
    logged and the rows are written anyway.
    """
    if len(entries) < 2:
        raise ValidationError("A double-entry posting needs at least two ledger rows.")

    # Validate everything before touching the database
    built = [_build_entry(tenant, user=user, **entry) for entry in entries]

    total_debit = sum((e.debit_amount for e in built), ZERO)
    total_credit = sum((e.credit_amount for e in built), ZERO)
    if total_debit != total_credit:
        if not allow_imbalance:
            raise UnbalancedLedgerError(
                f"Ledger posting not balanced: debits={total_debit}, credits={total_credit}"
            )
        logger.warning(
            "Unbalanced ledger posting for tenant %s (%s %s): debits=%s credits=%s",
            tenant.pk,
            built[0].reference_type,
            built[0].reference_id,
            total_debit,
            total_credit,
        )

    # Everything inside either succeeds as one unit or rolls back
    with transaction.atomic():
        for entry in built:
            entry.save()
    return built


def record_farmer_bill_transaction(bill, user=None) -> List[LedgerEntry]:
    """
    Purchase from the farmer:
    Dr purchases / Cr accounts_payable for the gross amount,
    plus Cr rok_income when rok was deducted.
    """
    common = {
        "transaction_type": "purchase",
        "entity_type": "farmer",
        "entity_id": bill.farmer_id,
        "reference_type": "farmer_bill",
        "reference_id": bill.pk,
        "transaction_date": bill.bill_date,
    }
    entries = [
        dict(common, account_head="purchases", debit_amount=bill.total_amount, credit_amount=0,
             description=f"Purchase from farmer - Patti {bill.patti_number}"),
        dict(common, account_head="accounts_payable", debit_amount=0, credit_amount=bill.total_amount,
             description=f"Amount payable to farmer - Patti {bill.patti_number}"),
    ]
    rok = to_decimal(bill.rok)
    if rok > ZERO:
        entries.append(
            dict(common, transaction_type="income", account_head="rok_income",
                 debit_amount=0, credit_amount=rok,
                 description=f"Rok commission - Patti {bill.patti_number}")
        )
    # rok is recognised as income without an offsetting debit
    return record_balanced_entries(
        bill.tenant, entries, user=user, allow_imbalance=rok > ZERO
    )


def record_tax_invoice_transaction(invoice, user=None) -> List[LedgerEntry]:
    """
    Sale to the buyer:
    Cr sales (basic), Dr accounts_receivable (invoice total),
    Cr service_charges (packaging + hamali + weighing + commission).
    Taxes collected are not posted, so the rows do not net to zero.
    """
    common = {
        "transaction_type": "sale",
        "entity_type": "buyer",
        "entity_id": invoice.buyer_id,
        "reference_type": "tax_invoice",
        "reference_id": invoice.pk,
        "transaction_date": invoice.invoice_date,
    }
    entries = [
        dict(common, account_head="sales", debit_amount=0, credit_amount=invoice.basic_amount,
             description=f"Sales to buyer - Invoice {invoice.invoice_number}"),
        dict(common, account_head="accounts_receivable", debit_amount=invoice.total_amount,
             credit_amount=0,
             description=f"Amount receivable from buyer - Invoice {invoice.invoice_number}"),
    ]
    service_charges = (
        to_decimal(invoice.packaging)
        + to_decimal(invoice.hamali)
        + to_decimal(invoice.weighing_charges)
        + to_decimal(invoice.commission)
    )
    if service_charges > ZERO:
        entries.append(
            dict(common, transaction_type="income", account_head="service_charges",
                 debit_amount=0, credit_amount=service_charges,
                 description=f"Service charges - Invoice {invoice.invoice_number}")
        )
    return record_balanced_entries(invoice.tenant, entries, user=user, allow_imbalance=True)


def _cash_or_bank(payment_method):
    return "cash" if payment_method == "cash" else "bank"


def _record_payment(
    tenant, *, transaction_type, entity_type, entity_id, amount, payment_method,
    reference_type, reference_id, counter_head, description, user, transaction_date,
):
    amount = money(to_decimal(amount))
    if amount <= ZERO:
        raise ValidationError("Payment amount must be positive.")
    day = parse_date(transaction_date) if transaction_date else timezone.localdate()
    head = _cash_or_bank(payment_method)
    receiving = transaction_type == "payment_received"

    common = {
        "transaction_type": transaction_type,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "reference_type": reference_type,
        "reference_id": reference_id,
        "transaction_date": day,
        "description": description,
    }
    entries = [
        # money comes in on the debit side, goes out on the credit side
        dict(common, account_head=head,
             debit_amount=amount if receiving else 0,
             credit_amount=0 if receiving else amount),
        dict(common, account_head=counter_head,
             debit_amount=0 if receiving else amount,
             credit_amount=amount if receiving else 0),
    ]

    with transaction.atomic():
        rows = record_balanced_entries(tenant, entries, user=user)
        # non-cash movements also leave a bank audit row
        if head == "bank":
            BankTransaction.objects.create(
                tenant=tenant,
                bank_account="main",
                transaction_type="deposit" if receiving else "withdrawal",
                amount=amount,
                description=description,
                reference_type=reference_type,
                reference_id=reference_id,
                transaction_date=day,
                created_by=user if getattr(user, "is_authenticated", False) else None,
            )
        log_action(
            action="record_payment",
            instance=rows[0],
            user=user,
            tenant=tenant,
            changes={
                "type": transaction_type,
                "entity": f"{entity_type}:{entity_id}",
                "amount": str(amount),
                "method": payment_method,
            },
        )
    logger.info(
        "Recorded %s of %s via %s for %s %s", transaction_type, amount, payment_method,
        entity_type, entity_id,
    )
    return rows


def record_payment_received(
    tenant, buyer_id, amount, payment_method, reference_type="tax_invoice",
    reference_id=None, user=None, transaction_date=None,
) -> List[LedgerEntry]:
    """Buyer settles: Dr cash/bank, Cr accounts_receivable"""
    return _record_payment(
        tenant,
        transaction_type="payment_received",
        entity_type="buyer",
        entity_id=buyer_id,
        amount=amount,
        payment_method=payment_method,
        reference_type=reference_type,
        reference_id=reference_id,
        counter_head="accounts_receivable",
        description=f"Payment received from buyer via {payment_method}",
        user=user,
        transaction_date=transaction_date,
    )


def record_payment_made(
    tenant, farmer_id, amount, payment_method, reference_type="farmer_bill",
    reference_id=None, user=None, transaction_date=None,
) -> List[LedgerEntry]:
    """Farmer is paid: Dr accounts_payable, Cr cash/bank"""
    return _record_payment(
        tenant,
        transaction_type="payment_made",
        entity_type="farmer",
        entity_id=farmer_id,
        amount=amount,
        payment_method=payment_method,
        reference_type=reference_type,
        reference_id=reference_id,
        counter_head="accounts_payable",
        description=f"Payment made to farmer via {payment_method}",
        user=user,
        transaction_date=transaction_date,
    )


def record_expense_transaction(expense, user=None) -> List[LedgerEntry]:
    """Dr expenses / Cr cash or bank, depending on how it was paid"""
    common = {
        "transaction_type": "expense",
        "entity_type": "expense",
        "entity_id": expense.pk,
        "reference_type": "expense",
        "reference_id": expense.pk,
        "transaction_date": expense.expense_date,
    }
    entries = [
        dict(common, account_head="expenses", debit_amount=expense.amount, credit_amount=0,
             description=f"{expense.category}: {expense.description}"),
        dict(common, account_head=_cash_or_bank(expense.payment_method),
             debit_amount=0, credit_amount=expense.amount,
             description=f"Paid via {expense.payment_method}: {expense.description}"),
    ]
    return record_balanced_entries(expense.tenant, entries, user=user)
