"""Tests for carrier error code translation to shipbridge E-codes."""

import pytest

from shipbridge.errors import translate_carrier_error


class TestCodeMapping:
    """Known carrier codes map to registry codes."""

    @pytest.mark.parametrize(
        "carrier_code,expected",
        [
            ("250003", "E-5001"),
            ("111285", "E-2001"),
            ("111286", "E-2002"),
            ("120802", "E-3003"),
            ("111210", "E-3004"),
            ("111035", "E-2004"),
            ("151018", "E-2006"),
        ],
    )
    def test_known_codes(self, carrier_code, expected):
        code, _, _ = translate_carrier_error(carrier_code, "whatever")
        assert code == expected

    def test_message_carried_into_e5001(self):
        code, message, remediation = translate_carrier_error("250002", "Invalid Authentication Information.")
        assert code == "E-5001"
        assert "Invalid Authentication Information." in message
        assert remediation


class TestMessagePatterns:
    """Unknown codes fall back to message patterns, then E-3005."""

    def test_pattern_match(self):
        code, _, _ = translate_carrier_error("999999", "The requested service is unavailable")
        assert code == "E-3004"

    def test_unknown(self):
        code, message, _ = translate_carrier_error("999999", "Something odd happened")
        assert code == "E-3005"
        assert "Something odd happened" in message

    def test_no_message_uses_code(self):
        code, message, _ = translate_carrier_error("999999", None)
        assert code == "E-3005"
        assert "Code: 999999" in message
