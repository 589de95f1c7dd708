from dataclasses import dataclass, fields, replace
from decimal import Decimal

from django.core.exceptions import ValidationError

from .money import to_decimal


@dataclass(frozen=True)
class RateSettings:
    """
    Per-bag charges (rupees) and percentage rates used by every bill,
    invoice and report of a tenant.

    Resolved once per tenant from settings["gstSettings"];
    keys missing there fall back to the defaults below.
    """
    packaging: Decimal = Decimal("5")  # per bag
    weighing_fee: Decimal = Decimal("2")  # per bag
    unload_hamali: Decimal = Decimal("3")  # per bag
    apmc_commission: Decimal = Decimal("2")  # % of gross
    sgst: Decimal = Decimal("2.5")  # %
    cgst: Decimal = Decimal("2.5")  # %
    cess: Decimal = Decimal("0.6")  # % of basic amount

    # dataclass field -> key stored in gstSettings
    SETTINGS_KEYS = {
        "packaging": "packaging",
        "weighing_fee": "weighingFee",
        "unload_hamali": "unloadHamali",
        "apmc_commission": "apmcCommission",
        "sgst": "sgst",
        "cgst": "cgst",
        "cess": "cess",
    }

    @classmethod
    def from_settings(cls, gst_settings):
        overrides = {}
        for f in fields(cls):
            raw = (gst_settings or {}).get(cls.SETTINGS_KEYS[f.name])
            # blank means "not configured", an explicit 0 is honoured
            if raw is None or raw == "":
                continue
            value = to_decimal(raw, field=cls.SETTINGS_KEYS[f.name])
            if value < 0:
                raise ValidationError(
                    f"Rate {cls.SETTINGS_KEYS[f.name]} must not be negative, got {raw!r}"
                )
            overrides[f.name] = value
        return replace(cls(), **overrides)

    @classmethod
    def for_tenant(cls, tenant):
        return cls.from_settings(tenant.gst_settings)

    def as_settings(self):
        """Inverse of from_settings, for storing back on the tenant"""
        return {
            key: str(getattr(self, name)) for name, key in self.SETTINGS_KEYS.items()
        }


DEFAULT_RATES = RateSettings()
