"""
Unit tests for intake validation and envelope construction
"""
import json
import uuid

import pytest
from pydantic import ValidationError

from log_common.models import LogEnvelope, Source
from log_intake.models.requests import IntakeRequest
from log_intake.services.intake import (
    MISSING_REQUIRED_FIELDS,
    MISSING_TENANT_HEADER,
    UNSUPPORTED_CONTENT_TYPE,
    IntakeService,
    ValidationFailure,
    parse_submission,
)
from log_intake.services.queue import QueuePublishError


def json_request(payload, content_type="application/json") -> IntakeRequest:
    return IntakeRequest(content_type=content_type, body=json.dumps(payload).encode('utf-8'))


def text_request(text: str, tenant=None, content_type="text/plain") -> IntakeRequest:
    return IntakeRequest(content_type=content_type, tenant_header=tenant, body=text.encode('utf-8'))


class TestParseStructuredSubmission:
    """application/json submissions."""

    def test_supplied_log_id_is_kept(self):
        envelope = parse_submission(json_request({"tenant_id": "acme", "log_id": "log-001", "text": "hi"}))

        assert envelope == LogEnvelope(tenant_id="acme", log_id="log-001", text="hi", source=Source.JSON)

    def test_missing_log_id_is_generated(self):
        envelope = parse_submission(json_request({"tenant_id": "acme", "text": "hi"}))

        assert isinstance(envelope, LogEnvelope)
        assert uuid.UUID(envelope.log_id)

    def test_empty_log_id_is_generated(self):
        envelope = parse_submission(json_request({"tenant_id": "acme", "log_id": "", "text": "hi"}))
        assert envelope.log_id != ""

    def test_generated_log_ids_are_unique(self):
        request = json_request({"tenant_id": "acme", "text": "hi"})
        ids = {parse_submission(request).log_id for _ in range(50)}
        assert len(ids) == 50

    def test_content_type_with_charset_is_structured(self):
        envelope = parse_submission(
            json_request({"tenant_id": "acme", "text": "hi"}, content_type="Application/JSON; charset=utf-8")
        )
        assert envelope.source is Source.JSON

    @pytest.mark.parametrize("payload", [
        {"text": "hi"},
        {"tenant_id": "acme"},
        {"tenant_id": "", "text": "hi"},
        {"tenant_id": "acme", "text": ""},
        {},
    ])
    def test_missing_required_fields(self, payload):
        assert parse_submission(json_request(payload)) == ValidationFailure(MISSING_REQUIRED_FIELDS)

    @pytest.mark.parametrize("body", [b"not json", b"", b"\xff\xfe"])
    def test_undecodable_body_raises(self, body):
        request = IntakeRequest(content_type="application/json", body=body)
        with pytest.raises(ValueError):
            parse_submission(request)

    @pytest.mark.parametrize("body", [b"[1, 2]", b"\"text\"", b"null"])
    def test_non_object_body_raises(self, body):
        request = IntakeRequest(content_type="application/json", body=body)
        with pytest.raises(ValueError, match="Expected a JSON object"):
            parse_submission(request)

    def test_non_string_values_raise(self):
        with pytest.raises(ValidationError):
            parse_submission(json_request({"tenant_id": 42, "text": "hi"}))

    def test_unknown_keys_are_ignored(self):
        envelope = parse_submission(json_request({"tenant_id": "acme", "text": "hi", "level": "INFO"}))
        assert isinstance(envelope, LogEnvelope)


class TestParsePlainTextSubmission:
    """text/plain submissions."""

    def test_tenant_from_header_and_body_verbatim(self):
        envelope = parse_submission(text_request("  raw line 555-1234\n", tenant="acme"))

        assert envelope.tenant_id == "acme"
        assert envelope.text == "  raw line 555-1234\n"
        assert envelope.source is Source.TEXT_UPLOAD
        assert uuid.UUID(envelope.log_id)

    @pytest.mark.parametrize("tenant", [None, ""])
    def test_missing_tenant_header(self, tenant):
        assert parse_submission(text_request("hello", tenant=tenant)) == ValidationFailure(MISSING_TENANT_HEADER)

    def test_empty_body_is_missing_required_fields(self):
        assert parse_submission(text_request("", tenant="acme")) == ValidationFailure(MISSING_REQUIRED_FIELDS)

    def test_non_utf8_body_raises(self):
        request = IntakeRequest(content_type="text/plain", tenant_header="acme", body=b"\xff\xfe")
        with pytest.raises(UnicodeDecodeError):
            parse_submission(request)


class TestParseOtherContentTypes:

    @pytest.mark.parametrize("content_type", ["application/xml", "", "multipart/form-data"])
    def test_unsupported_content_type(self, content_type):
        request = IntakeRequest(content_type=content_type, tenant_header="acme", body=b"hello")
        assert parse_submission(request) == ValidationFailure(UNSUPPORTED_CONTENT_TYPE)


class TestIntakeService:
    """Outcome mapping and the enqueue side effect."""

    def test_accepted_submission_is_published_once(self, mock_publisher):
        service = IntakeService(mock_publisher)

        result = service.submit(json_request({"tenant_id": "acme", "log_id": "log-001", "text": "hi"}))

        assert result.status_code == 202
        assert result.accepted
        assert result.body == {"message": "Accepted", "log_id": "log-001"}
        mock_publisher.publish.assert_called_once()
        published = mock_publisher.publish.call_args[0][0]
        assert published.log_id == result.log_id

    def test_rejected_submission_is_never_published(self, mock_publisher):
        service = IntakeService(mock_publisher)

        result = service.submit(text_request("hello"))

        assert result.status_code == 400
        assert result.body == {"error": MISSING_TENANT_HEADER}
        mock_publisher.publish.assert_not_called()

    def test_publish_failure_is_internal_error(self, mock_publisher):
        mock_publisher.publish.side_effect = QueuePublishError("Failed to enqueue log: ServiceUnavailable")
        service = IntakeService(mock_publisher)

        result = service.submit(json_request({"tenant_id": "acme", "text": "hi"}))

        assert result.status_code == 500
        assert result.body["error"].startswith("Internal server error")
        assert "ServiceUnavailable" in result.body["error"]
        assert mock_publisher.publish.call_count == 1

    @pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'{"tenant_id": 42, "text": "hi"}'])
    def test_malformed_structured_body_is_internal_error(self, mock_publisher, body):
        service = IntakeService(mock_publisher)

        result = service.submit(IntakeRequest(content_type="application/json", body=body))

        assert result.status_code == 500
        assert result.body["error"].startswith("Internal server error: ")
        mock_publisher.publish.assert_not_called()

    def test_non_utf8_plain_text_is_internal_error(self, mock_publisher):
        service = IntakeService(mock_publisher)

        result = service.submit(IntakeRequest(content_type="text/plain", tenant_header="acme", body=b"\xff"))

        assert result.status_code == 500
        mock_publisher.publish.assert_not_called()
