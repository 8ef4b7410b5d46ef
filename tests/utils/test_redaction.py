"""Tests for secret redaction utility."""

from shipbridge.utils.redaction import redact_for_logging, redact_xml


class TestRedactForLogging:

    def test_redacts_sensitive_keys(self):
        data = {"key": "ACCESSKEY", "login": "shipper", "password": "hunter2", "test": True}
        result = redact_for_logging(data)
        assert result["key"] == "***REDACTED***"
        assert result["login"] == "***REDACTED***"
        assert result["password"] == "***REDACTED***"
        assert result["test"] is True

    def test_preserves_non_sensitive(self):
        data = {"origin_account": "A1B2C3", "service": "03"}
        assert redact_for_logging(data) == data

    def test_handles_nested_dict(self):
        data = {"ups": {"password": "hunter2", "test": True}}
        result = redact_for_logging(data)
        assert result["ups"]["password"] == "***REDACTED***"
        assert result["ups"]["test"] is True

    def test_handles_list_of_dicts(self):
        data = {"carriers": [{"password": "leaked", "name": "ups"}]}
        result = redact_for_logging(data)
        assert result["carriers"][0]["password"] == "***REDACTED***"
        assert result["carriers"][0]["name"] == "ups"

    def test_none_values_kept(self):
        assert redact_for_logging({"password": None}) == {"password": None}

    def test_does_not_mutate_input(self):
        data = {"password": "hunter2"}
        redact_for_logging(data)
        assert data == {"password": "hunter2"}


class TestRedactXml:

    def test_redacts_access_request(self):
        xml = (
            "<AccessRequest><AccessLicenseNumber>KEY</AccessLicenseNumber>"
            "<UserId>shipper</UserId><Password>hunter2</Password></AccessRequest>"
            "<TrackRequest><TrackingNumber>1Z999</TrackingNumber></TrackRequest>"
        )
        result = redact_xml(xml)
        assert "KEY" not in result
        assert "shipper" not in result
        assert "hunter2" not in result
        assert "<TrackingNumber>1Z999</TrackingNumber>" in result

    def test_none(self):
        assert redact_xml(None) is None
