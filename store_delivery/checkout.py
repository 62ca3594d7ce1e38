"""Checkout arithmetic: voucher discounts and order totals."""

from dataclasses import dataclass
from datetime import datetime, timezone

from store_delivery.models import ADJUSTMENT_TYPES, DeliveryFeeResult
from store_delivery.money import format_currency, percentage_of

FULFILLMENT_OPTIONS = ("delivery", "pickup")


@dataclass
class Voucher:
    """A discount voucher.

    ``value`` is a percentage for ``"percentage"`` vouchers and an amount in
    minor units for ``"fixed"`` vouchers. ``max_discount`` caps percentage
    discounts.
    """

    code: str
    discount_type: str
    value: float
    min_spend: int = 0
    max_discount: int | None = None
    is_active: bool = True
    expires_at: datetime | None = None

    def __post_init__(self):
        if self.discount_type not in ADJUSTMENT_TYPES:
            raise ValueError(
                f"Unsupported discount type '{self.discount_type}'. "
                f"Supported: {', '.join(ADJUSTMENT_TYPES)}."
            )


@dataclass
class VoucherValidation:
    valid: bool
    discount_amount: int = 0
    error_message: str | None = None


def _as_utc(value: datetime) -> datetime:
    # Timestamps without an offset are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_voucher(
    voucher: Voucher | None,
    cart_total: int,
    now: datetime | None = None,
) -> VoucherValidation:
    """Check a voucher against a cart and compute its discount.

    Args:
        voucher: The voucher matching the entered code, or None if no
            voucher matched.
        cart_total: Cart subtotal in minor units.
        now: Reference time for the expiry check (default: current UTC time).

    Returns:
        A VoucherValidation. Invalid vouchers carry a customer-facing
        error message and a zero discount.
    """
    if voucher is None:
        return VoucherValidation(valid=False, error_message="Invalid voucher code")
    if not voucher.is_active:
        return VoucherValidation(valid=False, error_message="This voucher is no longer active")

    if voucher.expires_at is not None:
        now = _as_utc(now or datetime.now(timezone.utc))
        if _as_utc(voucher.expires_at) < now:
            return VoucherValidation(valid=False, error_message="This voucher has expired")

    if voucher.min_spend and cart_total < voucher.min_spend:
        return VoucherValidation(
            valid=False,
            error_message=(
                "This voucher requires a minimum spend of "
                f"{format_currency(voucher.min_spend, symbol='₦')}"
            ),
        )

    if voucher.discount_type == "percentage":
        discount = percentage_of(cart_total, voucher.value)
        if voucher.max_discount is not None:
            discount = min(discount, voucher.max_discount)
    else:
        # Don't exceed the cart total.
        discount = min(int(voucher.value), cart_total)

    return VoucherValidation(valid=True, discount_amount=discount)


@dataclass
class CheckoutSummary:
    subtotal: int
    shipping: int
    discount: int
    total: int


def summarize_checkout(
    subtotal: int,
    fulfillment: str,
    delivery: DeliveryFeeResult | None = None,
    discount: int = 0,
) -> CheckoutSummary:
    """Combine subtotal, shipping and discount into the amount due.

    Shipping is charged only for delivery orders with an available
    delivery quote; pickup orders ship free.
    """
    if fulfillment not in FULFILLMENT_OPTIONS:
        raise ValueError(
            f"Unsupported fulfillment option '{fulfillment}'. "
            f"Supported: {', '.join(FULFILLMENT_OPTIONS)}."
        )

    shipping = 0
    if fulfillment == "delivery" and delivery is not None and delivery.is_delivery_available:
        shipping = delivery.fee

    total = max(subtotal + shipping - discount, 0)
    return CheckoutSummary(
        subtotal=subtotal,
        shipping=shipping,
        discount=discount,
        total=total,
    )
