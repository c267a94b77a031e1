"""Tests for the shared masked-value detector."""

import pytest

from piimask.core.detection import PLACEHOLDER_EMAIL, any_masked, is_masked


class TestIsMasked:
    """Test the is_masked heuristic."""

    @pytest.mark.parametrize(
        "value",
        [
            "jo***@ex*****.com",
            "******4567",
            PLACEHOLDER_EMAIL,
            "192.168.1.0",
            "2001:db8:85a3::8a2e:370:0",
            "::",
            "::0",
            "Chrome on Windows",
            "Unknown Browser on Unknown OS",
        ],
    )
    def test_masked_signatures(self, value: str) -> None:
        """Each signature left by the maskers is detected."""
        assert is_masked(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "john@example.com",
            "192.168.1.100",
            "2001:db8:85a3::8a2e:370:7334",
            "John Smith",
            "555-123-4567",
            "Chrome on Windows 11",
        ],
    )
    def test_clear_values(self, value: str) -> None:
        """Ordinary personal data is not reported as masked."""
        assert is_masked(value) is False

    @pytest.mark.parametrize("value", ["", None, 0, [], {}])
    def test_empty_values_are_not_masked(self, value: object) -> None:
        assert is_masked(value) is False

    def test_non_string_values_are_coerced(self) -> None:
        assert is_masked(1.0) is True
        assert is_masked(12345) is False

    def test_placeholder_must_match_exactly(self) -> None:
        assert is_masked("deleted@site.invalid.example") is False


class TestKnownFalsePositives:
    """Genuine values that carry a masking signature.

    The detector is a heuristic; these cases document its limits rather
    than bugs to be fixed.
    """

    def test_version_string_ending_in_zero(self) -> None:
        assert is_masked("1.0") is True

    def test_genuine_address_ending_in_zero_octet(self) -> None:
        assert is_masked("10.0.0.0") is True

    def test_text_containing_asterisk(self) -> None:
        assert is_masked("P@ss*word") is True

    def test_plain_sentence_with_on(self) -> None:
        assert is_masked("Dinner on Friday") is True


class TestAnyMasked:
    """Test the multi-value helper used by record checks."""

    def test_any_single_masked_value_counts(self) -> None:
        assert any_masked("John Doe", "jo***@ex*****.com") is True

    def test_all_clear(self) -> None:
        assert any_masked("John Doe", "john@example.com", None) is False

    def test_no_values(self) -> None:
        assert any_masked() is False
