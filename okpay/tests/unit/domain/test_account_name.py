"""
Unit tests for account sanitizing and AccountName.

Usage:
    python okpay/tests/unit/domain/test_account_name.py
    pytest okpay/tests/unit/domain/test_account_name.py
"""

from shared.tests import LaborantTest

from okpay.domain.value_objects import AccountName, sanitize_account


class TestAccountName(LaborantTest):
    """Unit tests for sanitize_account and AccountName."""

    component_name = "okpay"
    test_category = "unit"

    # ================================================================
    # sanitize_account
    # ================================================================

    def test_sanitize_trims_and_lowercases(self):
        """Test whitespace is trimmed and letters lowercased."""
        self.reporter.info("Testing trim and lowercase", context="Test")

        assert sanitize_account("  Alice  ") == "alice"
        assert sanitize_account("BOB.Test") == "bob.test"

    def test_sanitize_drops_disallowed_characters(self):
        """Test characters outside a-z, 0-9, '-' and '.' are removed."""
        self.reporter.info("Testing disallowed characters", context="Test")

        assert sanitize_account("@alice!") == "alice"
        assert sanitize_account("my_acc ount#1") == "myaccount1"
        assert sanitize_account("héllo-world") == "hllo-world"

    def test_sanitize_truncates_to_sixteen(self):
        """Test result never exceeds 16 characters."""
        self.reporter.info("Testing truncation", context="Test")

        result = sanitize_account("abcdefghijklmnopqrstuvwxyz")

        assert result == "abcdefghijklmnop"
        assert len(result) == 16

    def test_sanitize_empty_and_none(self):
        """Test empty input and None yield empty string."""
        assert sanitize_account("") == ""
        assert sanitize_account(None) == ""
        assert sanitize_account("   ") == ""
        assert sanitize_account("!!!") == ""

    def test_sanitize_is_idempotent(self):
        """Test sanitizing twice equals sanitizing once."""
        self.reporter.info("Testing idempotence", context="Test")

        samples = [
            "  Alice ",
            "@@bob__",
            "x" * 40,
            "Some.User-Name99!",
            "",
            "ÄÖÜ",
            "a b c",
        ]
        for raw in samples:
            once = sanitize_account(raw)
            assert sanitize_account(once) == once

        self.reporter.info("Sanitizer idempotent on all samples", context="Test")

    def test_sanitized_output_charset(self):
        """Test output only contains allowed characters."""
        allowed = set("abcdefghijklmnopqrstuvwxyz0123456789-.")
        result = sanitize_account("A!b@C#1$2%-^.&*()_+=[]{}|;:'\",<>/?`~")
        assert set(result) <= allowed

    # ================================================================
    # AccountName
    # ================================================================

    def test_from_raw_sanitizes(self):
        """Test from_raw produces canonical form."""
        name = AccountName.from_raw("  @Alice ")

        assert name.value == "alice"
        assert str(name) == "alice"

    def test_rejects_unsanitized_value(self):
        """Test direct construction with raw input fails."""
        self.reporter.info("Testing unsanitized rejection", context="Test")

        try:
            AccountName("Alice")
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "not sanitized" in str(e)

    def test_is_empty(self):
        """Test is_empty for blank candidates."""
        assert AccountName.from_raw("").is_empty()
        assert not AccountName.from_raw("a").is_empty()

    def test_well_formed_names(self):
        """Test names matching the Hive pattern."""
        for raw in ["abc", "alice", "bob-1", "user.name", "0day", "a" * 16]:
            assert AccountName.from_raw(raw).is_well_formed(), raw

    def test_malformed_names(self):
        """Test names failing the Hive pattern."""
        self.reporter.info("Testing malformed names", context="Test")

        for raw in ["", "xx", "-alice", ".bob", "ab"]:
            assert not AccountName.from_raw(raw).is_well_formed(), raw

    def test_equality_by_value(self):
        """Test value object equality."""
        assert AccountName.from_raw("Alice") == AccountName("alice")
        assert AccountName("alice") != AccountName("bob")


if __name__ == "__main__":
    TestAccountName.run_as_main()
