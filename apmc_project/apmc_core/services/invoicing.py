import logging
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from ..exceptions import DuplicateBillError, UnbalancedLedgerError
from ..models import Buyer, Lot, TaxInvoice
from .audit_helper import log_action
from .billing import _buyer_bags, _weighed_totals
from .fiscal import parse_date
from .money import ZERO, money, percent_of, quintals
from .rates import RateSettings
from .recorder import record_tax_invoice_transaction

logger = logging.getLogger(__name__)


def invoice_number_for(buyer_id, day):
    """INV-YYYYMMDD-BBB, buyer id zero-padded to three digits"""
    return f"INV-{day:%Y%m%d}-{buyer_id:03d}"


def _processed_lot_numbers(tenant, buyer, day):
    """Lot numbers already on an invoice for this buyer and day"""
    processed = set()
    for lot_ids in TaxInvoice.objects.for_tenant(tenant).filter(
        buyer=buyer, invoice_date=day
    ).values_list("lot_ids", flat=True):
        processed.update(str(n) for n in (lot_ids or []))
    return processed


def _invoice_lots(tenant, buyer, day):
    """
    Completed lots of the day that the buyer owns outright or holds
    weighed bags of, de-duplicated by lot number.
    """
    completed = Lot.objects.for_tenant(tenant).completed().created_on(day)
    direct = completed.filter(buyer=buyer)
    by_bag = completed.filter(
        bags__buyer=buyer,
        bags__weight__isnull=False,
        bags__weight__gt=0,
    ).distinct()

    unique = {}
    for lot in list(direct) + list(by_bag):
        unique.setdefault(lot.lot_number, lot)
    return [unique[number] for number in sorted(unique)]


def generate_tax_invoice(buyer_id, tenant, date=None, rates: Optional[RateSettings] = None):
    """
    Build the GST tax invoice document for a buyer's lots of one day.
    Lots already invoiced that day are skipped. Returns None when
    nothing is left to invoice.
    """
    buyer = Buyer.objects.for_tenant(tenant).filter(pk=buyer_id).first()
    if buyer is None:
        return None
    day = parse_date(date) if date else timezone.localdate()
    rates = rates or RateSettings.for_tenant(tenant)

    processed = _processed_lot_numbers(tenant, buyer, day)
    lots = [lot for lot in _invoice_lots(tenant, buyer, day) if lot.lot_number not in processed]
    if not lots:
        return None

    items = []
    total_bags = 0
    subtotal = ZERO
    for lot in lots:
        allocation, bags = _buyer_bags(lot, buyer)
        weight_kg, bag_count = _weighed_totals(bags)
        if bag_count == 0:
            continue
        weight_quintals = quintals(weight_kg)
        lot_price = lot.lot_price or ZERO
        basic = money(weight_quintals * lot_price)
        items.append({
            "lotNo": lot.lot_number,
            "itemName": (lot.variety_grade or "AGRICULTURAL PRODUCE").upper(),
            "hsnCode": buyer.hsn_code,
            "allocation": allocation,
            "bags": bag_count,
            "weightKg": money(weight_kg),
            "weightQuintals": weight_quintals,
            "ratePerQuintal": money(lot_price),
            "basicAmount": basic,
        })
        total_bags += bag_count
        subtotal += basic

    if not items:
        return None

    # each component is rounded first, so the totals add up to the paisa
    basic_amount = money(subtotal)
    packaging = money(total_bags * rates.packaging)
    hamali = money(total_bags * rates.unload_hamali)
    weighing_charges = money(total_bags * rates.weighing_fee)
    commission = money(percent_of(subtotal, rates.apmc_commission))
    cess = money(percent_of(subtotal, rates.cess))
    taxable_amount = basic_amount + packaging + hamali + weighing_charges + commission + cess
    sgst = money(percent_of(taxable_amount, rates.sgst))
    cgst = money(percent_of(taxable_amount, rates.cgst))
    igst = money(ZERO)  # intra-state sales only
    total_gst = sgst + cgst + igst
    total_amount = taxable_amount + total_gst

    return {
        "invoiceNumber": invoice_number_for(buyer.pk, day),
        "invoiceDate": f"{day:%d/%m/%Y}",
        "date": day.isoformat(),
        "hsnCode": buyer.hsn_code,
        "seller": {
            "companyName": tenant.name,
            "apmcCode": tenant.apmc_code,
            "address": tenant.address or tenant.place,
            "mobile": tenant.mobile_number,
            "gstin": tenant.gst_number,
            "pan": tenant.pan_number,
            "fssai": tenant.fssai_number,
        },
        "buyer": {
            "id": buyer.pk,
            "companyName": buyer.name,
            "contactPerson": buyer.contact_person,
            "address": buyer.address,
            "mobile": buyer.mobile,
            "gstin": buyer.gst_number,
            "pan": buyer.pan_number,
        },
        "items": items,
        "lotIds": [item["lotNo"] for item in items],
        "calculations": {
            "basicAmount": basic_amount,
            "packaging": packaging,
            "hamali": hamali,
            "weighingCharges": weighing_charges,
            "commission": commission,
            "cess": cess,
            "taxableAmount": taxable_amount,
            "sgst": sgst,
            "cgst": cgst,
            "igst": igst,
            "totalGst": total_gst,
            "totalAmount": total_amount,
        },
        "bankDetails": {
            "bankName": tenant.bank_name,
            "accountNumber": tenant.bank_account_number,
            "ifscCode": tenant.ifsc_code,
            "accountHolder": tenant.account_holder_name,
            "branchName": tenant.branch_name,
            "branchAddress": tenant.branch_address,
        },
    }


def create_tax_invoice(buyer: Buyer, *, date=None, user=None) -> Optional[TaxInvoice]:
    """
    Generate and persist the buyer's tax invoice for a day, mark its lots
    billed and post it to the ledger.

    Returns None when there is nothing to invoice. Raises DuplicateBillError
    when the buyer already has an invoice for that day.
    A failed ledger posting is logged and leaves the invoice in place.
    """
    tenant = buyer.tenant
    day = parse_date(date) if date else timezone.localdate()

    if TaxInvoice.objects.for_tenant(tenant).filter(buyer=buyer, invoice_date=day).exists():
        raise DuplicateBillError("Tax invoice already generated for this buyer on this date")

    document = generate_tax_invoice(buyer.pk, tenant, day)
    if document is None:
        return None
    calc = document["calculations"]
    lot_numbers = document["lotIds"]

    try:
        with transaction.atomic():
            invoice = TaxInvoice.objects.create(
                tenant=tenant,
                invoice_number=document["invoiceNumber"],
                buyer=buyer,
                invoice_date=day,
                basic_amount=calc["basicAmount"],
                packaging=calc["packaging"],
                hamali=calc["hamali"],
                weighing_charges=calc["weighingCharges"],
                commission=calc["commission"],
                cess=calc["cess"],
                sgst=calc["sgst"],
                cgst=calc["cgst"],
                igst=calc["igst"],
                total_gst=calc["totalGst"],
                total_amount=calc["totalAmount"],
                lot_ids=lot_numbers,
                invoice_data=document,
                created_by=user if getattr(user, "is_authenticated", False) else None,
            )
            # each lot carries an equal share of the invoice total
            Lot.objects.for_tenant(tenant).filter(lot_number__in=lot_numbers).update(
                bill_generated=True,
                bill_generated_at=timezone.now(),
                amount_due=money(invoice.total_amount / len(lot_numbers)),
            )
            log_action(
                action="create",
                instance=invoice,
                user=user,
                changes={
                    "invoice_number": invoice.invoice_number,
                    "total_amount": str(invoice.total_amount),
                    "lots": lot_numbers,
                },
            )
    except IntegrityError as exc:
        raise DuplicateBillError(
            f"Tax invoice {document['invoiceNumber']} already exists"
        ) from exc

    try:
        record_tax_invoice_transaction(invoice, user=user)
    except (DatabaseError, ValidationError, UnbalancedLedgerError):
        logger.exception("Error recording ledger entries for tax invoice %s", invoice.pk)

    logger.info("Tax invoice %s saved, total %s", invoice.invoice_number, invoice.total_amount)
    return invoice
