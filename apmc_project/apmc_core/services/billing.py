import logging
from typing import Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from ..exceptions import DuplicateBillError, UnbalancedLedgerError
from ..models import Bag, Buyer, Farmer, FarmerBill, Lot
from .audit_helper import log_action
from .fiscal import parse_date
from .money import ZERO, money, percent_of, quintals, to_decimal
from .rates import RateSettings
from .recorder import record_farmer_bill_transaction

logger = logging.getLogger(__name__)

# weight IS NOT NULL AND weight > 0
WEIGHED = Q(weight__isnull=False, weight__gt=0)


def _weighed_totals(bags):
    """Total kg and count of the weighed bags in a Bag queryset"""
    agg = bags.filter(WEIGHED).aggregate(weight=Sum("weight"), count=Count("id"))
    return agg["weight"] or ZERO, agg["count"]


def trader_info(tenant) -> Dict:
    """Seller block printed on buyer bills"""
    return {
        "name": tenant.name,
        "apmcCode": tenant.apmc_code,
        "place": tenant.place,
        "address": tenant.address,
        "mobile": tenant.mobile_number,
        "gstNumber": tenant.gst_number or None,
        "bankDetails": {
            "bankName": tenant.bank_name or None,
            "accountNumber": tenant.bank_account_number or None,
            "ifscCode": tenant.ifsc_code or None,
            "accountHolderName": tenant.account_holder_name or None,
        },
    }


# ----------------------------
# Farmer day bill
# ----------------------------
def generate_farmer_day_bill(farmer_id, date, tenant, rates: Optional[RateSettings] = None):
    """
    Settlement for one farmer's completed, priced lots of a market day.
    Returns None when the farmer has nothing billable that day.
    """
    day = parse_date(date)
    farmer = Farmer.objects.for_tenant(tenant).filter(pk=farmer_id).first()
    if farmer is None:
        return None
    rates = rates or RateSettings.for_tenant(tenant)

    lot_rows = []
    for lot in Lot.objects.billable_on(tenant, day).filter(farmer=farmer).order_by("lot_number"):
        total_weight, weighed_bags = _weighed_totals(lot.bags.all())
        if total_weight <= ZERO or weighed_bags == 0:
            continue

        weight_quintals = quintals(total_weight)
        gross = money(weight_quintals * lot.lot_price)
        bags = lot.number_of_bags
        row = {
            "lotNumber": lot.lot_number,
            "lotPrice": money(lot.lot_price),
            "numberOfBags": bags,
            "weighedBags": weighed_bags,
            "totalWeight": money(total_weight),
            "totalWeightQuintals": weight_quintals,
            "grossAmount": gross,
            "vehicleRent": money(lot.vehicle_rent),
            "advance": money(lot.advance),
            # per-bag charges
            "unloadHamali": money(rates.unload_hamali * bags),
            "packaging": money(rates.packaging * bags),
            "weighingFee": money(rates.weighing_fee * bags),
            # percentage of the gross amount
            "apmcCommission": money(percent_of(gross, rates.apmc_commission)),
            "grade": lot.grade or None,
        }
        row["totalDeductions"] = (
            row["vehicleRent"] + row["advance"] + row["unloadHamali"]
            + row["packaging"] + row["weighingFee"] + row["apmcCommission"]
        )
        row["netAmount"] = gross - row["totalDeductions"]
        lot_rows.append(row)

    if not lot_rows:
        return None

    summary = {
        "totalLots": len(lot_rows),
        "totalBags": sum(r["numberOfBags"] for r in lot_rows),
        "totalWeighedBags": sum(r["weighedBags"] for r in lot_rows),
        "totalWeight": sum((r["totalWeight"] for r in lot_rows), ZERO),
        "totalWeightQuintals": sum((r["totalWeightQuintals"] for r in lot_rows), ZERO),
        "grossAmount": sum((r["grossAmount"] for r in lot_rows), ZERO),
        "totalDeductions": sum((r["totalDeductions"] for r in lot_rows), ZERO),
        "netAmount": sum((r["netAmount"] for r in lot_rows), ZERO),
    }
    return {
        "farmerId": farmer.pk,
        "farmerName": farmer.name,
        "farmerMobile": farmer.mobile,
        "date": day.isoformat(),
        "lots": lot_rows,
        "summary": summary,
    }


def get_farmer_day_bills(date, tenant) -> List[Dict]:
    """Day bills for every farmer with weighed, billable lots that day"""
    day = parse_date(date)
    rates = RateSettings.for_tenant(tenant)
    farmer_ids = (
        Lot.objects.billable_on(tenant, day)
        .filter(bags__weight__isnull=False, bags__weight__gt=0)
        .values_list("farmer_id", flat=True)
        .distinct()
        .order_by("farmer_id")
    )
    bills = (generate_farmer_day_bill(fid, day, tenant, rates=rates) for fid in farmer_ids)
    return [bill for bill in bills if bill is not None]


def bill_data_from_day_bill(day_bill, *, rok=None, empty_bag_charges=None, other=None):
    """
    Map a farmer day bill onto the deduction columns of a persisted patti.

    Unload hamali goes to hamali, packaging to empty-bag charges,
    weighing fee to other charges and the APMC commission to rok,
    unless the caller overrides them.
    """
    lots = day_bill["lots"]
    summary = day_bill["summary"]

    def total(key):
        return sum((r[key] for r in lots), ZERO)

    return {
        "totalAmount": summary["grossAmount"],
        "hamali": total("unloadHamali"),
        "vehicleRent": total("vehicleRent"),
        "emptyBagCharges": total("packaging") if empty_bag_charges is None else money(empty_bag_charges),
        "advance": total("advance"),
        "rok": total("apmcCommission") if rok is None else money(rok),
        "other": total("weighingFee") if other is None else money(other),
        "totalBags": summary["totalBags"],
        "totalWeight": summary["totalWeight"],
    }


# ----------------------------
# Persisted farmer bill (patti)
# ----------------------------
DEDUCTION_KEYS = ("hamali", "vehicleRent", "emptyBagCharges", "advance", "rok", "other")


def create_farmer_bill(
    farmer: Farmer, *, patti_number, bill_data, lot_ids, bill_date=None, user=None
) -> FarmerBill:
    """
    Validate and persist a farmer bill, then post it to the ledger.

    Raises ValidationError for missing/invalid input and DuplicateBillError
    when the farmer already has a bill that day or the patti number is taken.
    A failed ledger posting is logged and leaves the saved bill in place.
    """
    tenant = farmer.tenant
    if not patti_number or not bill_data or not lot_ids:
        raise ValidationError("Missing required data: pattiNumber, billData, or lotIds")
    # form posts deliver nested values as plain strings
    if not isinstance(bill_data, dict):
        raise ValidationError("billData must be an object")
    if isinstance(lot_ids, str) or not isinstance(lot_ids, (list, tuple)):
        raise ValidationError("lotIds must be a list of lot numbers")

    total_amount = money(to_decimal(bill_data.get("totalAmount"), "totalAmount"))
    if total_amount <= ZERO:
        raise ValidationError("Invalid total amount for bill generation")

    deductions = {}
    for key in DEDUCTION_KEYS:
        # "otherCharges" is accepted as an alias of "other"
        raw = bill_data.get(key, bill_data.get("otherCharges") if key == "other" else None)
        value = money(to_decimal(raw, key))
        if value < ZERO:
            raise ValidationError(f"{key} must not be negative")
        deductions[key] = value

    try:
        total_bags = int(bill_data.get("totalBags") or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"totalBags must be a whole number, got {bill_data.get('totalBags')!r}")
    if total_bags < 0:
        raise ValidationError("totalBags must not be negative")

    total_deductions = sum(deductions.values(), ZERO)
    day = parse_date(bill_date) if bill_date else timezone.localdate()
    lot_numbers = [str(n) for n in lot_ids]

    # Friendly first check, the unique constraints below close the race
    if FarmerBill.objects.for_tenant(tenant).filter(farmer=farmer, bill_date=day).exists():
        raise DuplicateBillError("Farmer bill already generated for this farmer on this date")
    if FarmerBill.objects.for_tenant(tenant).filter(patti_number=patti_number).exists():
        raise DuplicateBillError("Patti number already exists. Please generate a new one.")

    try:
        with transaction.atomic():
            bill = FarmerBill.objects.create(
                tenant=tenant,
                patti_number=patti_number,
                farmer=farmer,
                bill_date=day,
                total_amount=total_amount,
                hamali=deductions["hamali"],
                vehicle_rent=deductions["vehicleRent"],
                empty_bag_charges=deductions["emptyBagCharges"],
                advance=deductions["advance"],
                rok=deductions["rok"],
                other_charges=deductions["other"],
                total_deductions=total_deductions,
                net_payable=total_amount - total_deductions,
                total_bags=total_bags,
                total_weight=money(to_decimal(bill_data.get("totalWeight"), "totalWeight")),
                lot_ids=lot_numbers,
                bill_data=bill_data,
                created_by=user if getattr(user, "is_authenticated", False) else None,
            )
            Lot.objects.for_tenant(tenant).filter(
                farmer=farmer, lot_number__in=lot_numbers
            ).update(bill_generated=True, bill_generated_at=timezone.now())
            log_action(
                action="create",
                instance=bill,
                user=user,
                changes={
                    "patti_number": patti_number,
                    "net_payable": str(bill.net_payable),
                    "lots": lot_numbers,
                },
            )
    except IntegrityError as exc:
        raise DuplicateBillError(
            f"Farmer bill for farmer {farmer.pk} on {day} or patti {patti_number} already exists"
        ) from exc

    try:
        record_farmer_bill_transaction(bill, user=user)
    except (DatabaseError, ValidationError, UnbalancedLedgerError):
        # the patti stands even without its ledger trail
        logger.exception("Error recording ledger entries for farmer bill %s", bill.pk)

    logger.info("Farmer bill %s saved for farmer %s, net %s", patti_number, farmer.pk, bill.net_payable)
    return bill


# ----------------------------
# Buyer day bill
# ----------------------------
def _buyer_bags(lot, buyer):
    """
    Bags of `lot` that belong on `buyer`'s bill.
    Lots split across buyers ("multi") count only the buyer's own bags,
    plus the unassigned ones when the lot itself was sold to the buyer.
    Otherwise ("single") every bag counts.
    """
    if lot.bags.filter(buyer__isnull=False).exists():
        if lot.buyer_id == buyer.pk:
            return "multi", lot.bags.filter(Q(buyer=buyer) | Q(buyer__isnull=True))
        return "multi", lot.bags.filter(buyer=buyer)
    return "single", lot.bags.all()


def generate_buyer_day_bill(buyer_id, date, tenant, rates: Optional[RateSettings] = None):
    """
    Itemised purchase bill for a buyer's lots of a market day,
    with per-bag charges and SGST/CGST/CESS on the gross amount.
    Returns None when nothing was bought that day.
    """
    day = parse_date(date)
    buyer = Buyer.objects.for_tenant(tenant).filter(pk=buyer_id).first()
    if buyer is None:
        return None
    rates = rates or RateSettings.for_tenant(tenant)

    lots = (
        Lot.objects.billable_on(tenant, day)
        .filter(Q(buyer=buyer) | Q(bags__buyer=buyer))
        .select_related("farmer")
        .distinct()
        .order_by("lot_number")
    )

    lot_rows = []
    for lot in lots:
        allocation, bags = _buyer_bags(lot, buyer)
        weight_kg, bag_count = _weighed_totals(bags)
        if bag_count == 0:
            continue

        weight_quintals = quintals(weight_kg)
        gross = money(weight_quintals * lot.lot_price)
        charges = {
            "hamali": money(rates.unload_hamali * bag_count),
            "packing": money(rates.packaging * bag_count),
            "weighingCharges": money(rates.weighing_fee * bag_count),
            "commission": money(percent_of(gross, rates.apmc_commission)),
            "sgst": money(percent_of(gross, rates.sgst)),
            "cgst": money(percent_of(gross, rates.cgst)),
            "cess": money(percent_of(gross, rates.cess)),
        }
        lot_charges = sum(charges.values(), ZERO)
        lot_rows.append({
            "lotNumber": lot.lot_number,
            "farmerName": lot.farmer.name,
            "variety": lot.variety_grade,
            "grade": lot.grade,
            "allocation": allocation,
            "numberOfBags": bag_count,
            "totalWeight": money(weight_kg),
            "totalWeightQuintals": weight_quintals,
            "pricePerQuintal": money(lot.lot_price),
            "hsnCode": buyer.hsn_code,
            "basicAmount": gross,
            "charges": charges,
            "totalCharges": lot_charges,
            "totalAmount": gross + lot_charges,
        })

    if not lot_rows:
        return None

    breakdown = {
        key: sum((r["charges"][key] for r in lot_rows), ZERO)
        for key in lot_rows[0]["charges"]
    }
    basic_amount = sum((r["basicAmount"] for r in lot_rows), ZERO)
    total_charges = sum(breakdown.values(), ZERO)

    return {
        "buyerId": buyer.pk,
        "buyerName": buyer.name,
        "buyerContact": buyer.mobile or buyer.contact_person,
        "buyerAddress": buyer.address,
        "buyerGstNumber": buyer.gst_number,
        "hsnCode": buyer.hsn_code,
        "date": day.isoformat(),
        "traderInfo": trader_info(tenant),
        "lots": lot_rows,
        "summary": {
            "totalLots": len(lot_rows),
            "totalBags": sum(r["numberOfBags"] for r in lot_rows),
            "totalWeight": sum((r["totalWeight"] for r in lot_rows), ZERO),
            "totalWeightQuintals": sum((r["totalWeightQuintals"] for r in lot_rows), ZERO),
            "basicAmount": basic_amount,
            "totalCharges": total_charges,
            "chargeBreakdown": breakdown,
            "totalPayable": basic_amount + total_charges,
        },
    }


def get_buyer_day_bills(date, tenant) -> List[Dict]:
    """Day bills for every buyer holding lots or bags that day"""
    day = parse_date(date)
    rates = RateSettings.for_tenant(tenant)
    billable = Lot.objects.billable_on(tenant, day)
    direct = billable.filter(buyer__isnull=False).values_list("buyer_id", flat=True)
    by_bag = (
        Bag.objects.for_tenant(tenant)
        .filter(lot__in=billable, buyer__isnull=False)
        .values_list("buyer_id", flat=True)
    )
    buyer_ids = sorted(set(direct) | set(by_bag))
    bills = (generate_buyer_day_bill(bid, day, tenant, rates=rates) for bid in buyer_ids)
    return [bill for bill in bills if bill is not None]
