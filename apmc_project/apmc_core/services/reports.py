import calendar
import datetime
import logging

from django.utils import timezone

from ..models import Lot
from .billing import _weighed_totals
from .money import ZERO, money, percent_of, quintals
from .rates import RateSettings

logger = logging.getLogger(__name__)

REPORT_TYPES = ("daily", "weekly", "monthly", "yearly")


def get_date_range(report_type, date=None):
    """
    Calendar window around `date` (default now) as aware datetimes.
    Weeks run Sunday to Saturday. The end is the last microsecond of the window.
    """
    now = date or timezone.now()
    if isinstance(now, datetime.datetime):
        day = timezone.localtime(now).date() if timezone.is_aware(now) else now.date()
    else:
        day = now

    if report_type == "daily":
        first, last = day, day
    elif report_type == "weekly":
        # weekday(): Monday is 0, so Sunday sits (weekday + 1) % 7 days back
        first = day - datetime.timedelta(days=(day.weekday() + 1) % 7)
        last = first + datetime.timedelta(days=6)
    elif report_type == "monthly":
        first = day.replace(day=1)
        last = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    elif report_type == "yearly":
        first = datetime.date(day.year, 1, 1)
        last = datetime.date(day.year, 12, 31)
    else:
        raise ValueError(f"Invalid report type: {report_type!r}")

    return _day_start(first), _day_end(last)


def _day_start(day):
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.min))


def _day_end(day):
    return timezone.make_aware(datetime.datetime.combine(day, datetime.time.max))


def _bounds(start, end):
    """Widen plain dates to whole days so both ends are inclusive"""
    if not isinstance(start, datetime.datetime):
        start = _day_start(start)
    if not isinstance(end, datetime.datetime):
        end = _day_end(end)
    return start, end


def _local_day(value):
    return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()


def _completed_lots(tenant, start, end):
    start, end = _bounds(start, end)
    return (
        Lot.objects.for_tenant(tenant)
        .completed()
        .filter(created_at__gte=start, created_at__lte=end)
        .select_related("farmer", "buyer")
        .order_by("created_at", "lot_number")
    )


def _lot_basics(lot):
    """Weight and basic amount of a lot, from its weighed bags"""
    weight, bag_count = _weighed_totals(lot.bags.all())
    weight_quintals = quintals(weight)
    basic = weight_quintals * (lot.lot_price or ZERO)
    buyer_names = sorted({
        name for name in lot.bags.filter(buyer__isnull=False).values_list("buyer__name", flat=True)
    })
    if lot.buyer_id:
        buyer_name = lot.buyer.name
    else:
        buyer_name = ", ".join(buyer_names) or None
    return {
        "date": _local_day(lot.created_at).isoformat(),
        "lotNumber": lot.lot_number,
        "farmerName": lot.farmer.name,
        "buyerName": buyer_name,
        "bags": bag_count,
        "weight": money(weight),
        "weightQuintals": weight_quintals,
        "basicAmount": basic,
    }


def _period(start, end):
    start, end = _bounds(start, end)
    return f"{_local_day(start)} to {_local_day(end)}"


def _rounded(row, keys):
    for key in keys:
        row[key] = money(row[key])
    return row


def generate_tax_report(tenant, start, end, report_type="custom"):
    """
    Per-lot tax workings for completed lots created in [start, end].

    taxable = basic + packaging + weighing + commission; SGST and CGST
    apply to the taxable amount while CESS applies to the basic amount.
    """
    rates = RateSettings.for_tenant(tenant)
    amount_keys = (
        "basicAmount", "packaging", "weighingCharges", "commission",
        "cessAmount", "sgstAmount", "cgstAmount", "totalTaxAmount", "totalAmount",
    )
    totals = dict.fromkeys(amount_keys, ZERO)
    total_weight = ZERO
    transactions = []

    for lot in _completed_lots(tenant, start, end):
        row = _lot_basics(lot)
        basic = row["basicAmount"]
        packaging = row["bags"] * rates.packaging
        weighing = row["bags"] * rates.weighing_fee
        commission = percent_of(basic, rates.apmc_commission)
        cess = percent_of(basic, rates.cess)
        taxable = basic + packaging + weighing + commission
        sgst = percent_of(taxable, rates.sgst)
        cgst = percent_of(taxable, rates.cgst)
        row.update({
            "packaging": packaging,
            "weighingCharges": weighing,
            "commission": commission,
            "cessAmount": cess,
            "sgstAmount": sgst,
            "cgstAmount": cgst,
            "totalTaxAmount": cess + sgst + cgst,
            "totalAmount": taxable + cess + sgst + cgst,
        })
        for key in amount_keys:
            totals[key] += row[key]
        total_weight += row["weight"]
        transactions.append(_rounded(row, amount_keys))

    summary = {
        "period": _period(start, end),
        "reportType": report_type,
        "totalTransactions": len(transactions),
        "totalWeight": total_weight,
        "totalWeightQuintals": quintals(total_weight),
    }
    summary.update({key: money(value) for key, value in totals.items()})
    logger.debug("Tax report for tenant %s: %s lots", tenant.pk, len(transactions))
    return {"summary": summary, "transactions": transactions}


def generate_cess_report(tenant, start, end, report_type="custom"):
    """CESS on the basic amount of every completed lot in the window"""
    rates = RateSettings.for_tenant(tenant)
    total_weight = total_basic = total_cess = ZERO
    transactions = []

    for lot in _completed_lots(tenant, start, end):
        row = _lot_basics(lot)
        cess = percent_of(row["basicAmount"], rates.cess)
        total_weight += row["weight"]
        total_basic += row["basicAmount"]
        total_cess += cess
        row["cessRate"] = rates.cess
        row["cessAmount"] = cess
        transactions.append(_rounded(row, ("basicAmount", "cessAmount")))

    return {
        "summary": {
            "period": _period(start, end),
            "reportType": report_type,
            "totalTransactions": len(transactions),
            "totalWeight": total_weight,
            "totalWeightQuintals": quintals(total_weight),
            "basicAmount": money(total_basic),
            "cessRate": rates.cess,
            "cessAmount": money(total_cess),
        },
        "transactions": transactions,
    }


def generate_gst_report(tenant, start, end, report_type="custom"):
    """SGST and CGST on the basic amount of every completed lot in the window"""
    rates = RateSettings.for_tenant(tenant)
    total_weight = total_basic = total_sgst = total_cgst = ZERO
    transactions = []

    for lot in _completed_lots(tenant, start, end):
        row = _lot_basics(lot)
        sgst = percent_of(row["basicAmount"], rates.sgst)
        cgst = percent_of(row["basicAmount"], rates.cgst)
        total_weight += row["weight"]
        total_basic += row["basicAmount"]
        total_sgst += sgst
        total_cgst += cgst
        row.update({
            "sgstAmount": sgst,
            "cgstAmount": cgst,
            "totalGstAmount": sgst + cgst,
            "totalAmount": row["basicAmount"] + sgst + cgst,
        })
        transactions.append(_rounded(
            row, ("basicAmount", "sgstAmount", "cgstAmount", "totalGstAmount", "totalAmount")
        ))

    return {
        "summary": {
            "period": _period(start, end),
            "reportType": report_type,
            "totalTransactions": len(transactions),
            "totalWeight": total_weight,
            "totalWeightQuintals": quintals(total_weight),
            "basicAmount": money(total_basic),
            "sgstRate": rates.sgst,
            "cgstRate": rates.cgst,
            "sgstAmount": money(total_sgst),
            "cgstAmount": money(total_cgst),
            "totalGstAmount": money(total_sgst + total_cgst),
            "totalAmount": money(total_basic + total_sgst + total_cgst),
        },
        "transactions": transactions,
    }
