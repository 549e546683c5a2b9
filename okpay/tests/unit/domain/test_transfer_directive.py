"""
Unit tests for TransferDirective and settlement amounts.

Usage:
    python okpay/tests/unit/domain/test_transfer_directive.py
    pytest okpay/tests/unit/domain/test_transfer_directive.py
"""

from decimal import Decimal

from shared.tests import LaborantTest

from okpay.domain.entities import TransferDirective, to_settlement_amount
from okpay.domain.exceptions import InvalidAmountError
from okpay.domain.value_objects import AccountName, Memo


class TestTransferDirective(LaborantTest):
    """Unit tests for TransferDirective entity."""

    component_name = "okpay"
    test_category = "unit"

    def setup_test(self):
        self.memo = Memo("kcs-hpos-0001-0002")

    # ================================================================
    # to_settlement_amount
    # ================================================================

    def test_amount_quantized_to_three_digits(self):
        """Test amounts carry exactly three fractional digits."""
        self.reporter.info("Testing quantization", context="Test")

        assert to_settlement_amount(10) == Decimal("10.000")
        assert str(to_settlement_amount("1.5")) == "1.500"
        assert str(to_settlement_amount(1.11)) == "1.110"
        assert str(to_settlement_amount("2.0005")) == "2.001"

    def test_invalid_amounts_rejected(self):
        """Test non-positive, non-finite and garbage amounts."""
        self.reporter.info("Testing invalid amounts", context="Test")

        for bad in [0, -1, "0", "", "abc", None, float("nan"), float("inf"),
                    "Infinity", True, "0.0004"]:
            try:
                to_settlement_amount(bad)
                assert False, f"Should have rejected {bad!r}"
            except InvalidAmountError as e:
                assert e.code == "INVALID_AMOUNT"

    # ================================================================
    # TransferDirective
    # ================================================================

    def test_directive_rendering(self):
        """Test amount strings and dict form."""
        directive = TransferDirective(
            to=AccountName("alice"),
            amount=to_settlement_amount(10),
            memo=self.memo,
        )

        assert directive.amount_str == "10.000"
        assert directive.amount_with_unit == "10.000 HBD"
        assert directive.to_dict() == {
            "to": "alice",
            "amount": "10.000",
            "asset": "HBD",
            "memo": "kcs-hpos-0001-0002",
        }

    def test_directive_requires_well_formed_recipient(self):
        """Test malformed recipient is rejected."""
        try:
            TransferDirective(AccountName("xx"), Decimal("1.000"), self.memo)
            assert False, "Should have raised ValueError"
        except ValueError:
            pass

    def test_directive_requires_quantized_amount(self):
        """Test amount must have three fractional digits."""
        try:
            TransferDirective(AccountName("alice"), Decimal("1.5"), self.memo)
            assert False, "Should have raised ValueError"
        except ValueError:
            pass


if __name__ == "__main__":
    TestTransferDirective.run_as_main()
