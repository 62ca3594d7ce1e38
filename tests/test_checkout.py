"""
Tests for voucher validation and checkout totals.
"""

from datetime import datetime, timedelta, timezone

import pytest

from store_delivery.checkout import Voucher, summarize_checkout, validate_voucher
from store_delivery.models import DeliveryFeeResult

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestValidateVoucher:

    def test_unknown_code(self):
        result = validate_voucher(None, 10000)
        assert result.valid is False
        assert result.discount_amount == 0
        assert result.error_message == "Invalid voucher code"

    def test_inactive(self):
        voucher = Voucher("OLD", "fixed", 500, is_active=False)
        result = validate_voucher(voucher, 10000, now=NOW)
        assert result.valid is False
        assert result.error_message == "This voucher is no longer active"

    def test_expired(self):
        voucher = Voucher("GONE", "fixed", 500, expires_at=NOW - timedelta(days=1))
        result = validate_voucher(voucher, 10000, now=NOW)
        assert result.valid is False
        assert result.error_message == "This voucher has expired"

    def test_not_yet_expired(self):
        voucher = Voucher("SOON", "fixed", 500, expires_at=NOW + timedelta(hours=1))
        assert validate_voucher(voucher, 10000, now=NOW).valid is True

    def test_naive_expiry_read_as_utc(self):
        expired = Voucher("GONE", "fixed", 500, expires_at=datetime(2024, 5, 31))
        current = Voucher("SOON", "fixed", 500, expires_at=datetime(2024, 6, 1, 13, 0))
        assert validate_voucher(expired, 10000, now=NOW).error_message == "This voucher has expired"
        assert validate_voucher(current, 10000, now=NOW).valid is True

    def test_naive_expiry_against_current_time(self):
        voucher = Voucher("OLD", "fixed", 500, expires_at=datetime(2000, 1, 1))
        assert validate_voucher(voucher, 10000).valid is False

    def test_naive_reference_time(self):
        voucher = Voucher("SOON", "fixed", 500, expires_at=NOW + timedelta(hours=1))
        assert validate_voucher(voucher, 10000, now=datetime(2024, 6, 1, 12, 0)).valid is True

    def test_minimum_spend(self):
        voucher = Voucher("BIG", "percentage", 10, min_spend=5000)
        result = validate_voucher(voucher, 4999, now=NOW)
        assert result.valid is False
        assert result.error_message == "This voucher requires a minimum spend of ₦50.00"

    def test_percentage_discount(self):
        voucher = Voucher("TEN", "percentage", 10)
        result = validate_voucher(voucher, 12345, now=NOW)
        assert result.valid is True
        assert result.discount_amount == 1235

    def test_percentage_capped(self):
        voucher = Voucher("TEN", "percentage", 10, max_discount=1000)
        assert validate_voucher(voucher, 50000, now=NOW).discount_amount == 1000

    def test_fixed_discount(self):
        voucher = Voucher("FLAT", "fixed", 2000)
        assert validate_voucher(voucher, 10000, now=NOW).discount_amount == 2000

    def test_fixed_discount_never_exceeds_cart(self):
        voucher = Voucher("FLAT", "fixed", 2000)
        assert validate_voucher(voucher, 1500, now=NOW).discount_amount == 1500

    def test_unknown_discount_type(self):
        with pytest.raises(ValueError):
            Voucher("BAD", "bogo", 1)


class TestSummarizeCheckout:

    def test_delivery_adds_fee(self):
        delivery = DeliveryFeeResult(fee=900, is_delivery_available=True)
        summary = summarize_checkout(10000, "delivery", delivery, discount=1000)
        assert summary.shipping == 900
        assert summary.total == 10000 + 900 - 1000

    def test_unavailable_delivery_ships_free(self):
        delivery = DeliveryFeeResult(fee=0, is_delivery_available=False, message="no")
        summary = summarize_checkout(10000, "delivery", delivery)
        assert summary.shipping == 0
        assert summary.total == 10000

    def test_pickup_ignores_delivery_fee(self):
        delivery = DeliveryFeeResult(fee=900, is_delivery_available=True)
        summary = summarize_checkout(10000, "pickup", delivery)
        assert summary.shipping == 0
        assert summary.total == 10000

    def test_delivery_without_quote(self):
        assert summarize_checkout(2500, "delivery").shipping == 0

    def test_total_never_negative(self):
        assert summarize_checkout(1000, "pickup", discount=5000).total == 0

    def test_unknown_fulfillment(self):
        with pytest.raises(ValueError):
            summarize_checkout(1000, "drone")
