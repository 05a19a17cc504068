"""
Intake service: turns a raw submission into a queued log envelope
"""

import json
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Union

from log_common.models import LogEnvelope, Source
from log_common.validation_utils import is_blank
from log_intake.models.requests import IngestJSONRequest, IntakeRequest
from log_intake.models.responses import accepted_body, error_body
from log_intake.utils.logger import get_logger

logger = get_logger('intake')

UNSUPPORTED_CONTENT_TYPE = "Unsupported Content-Type. Use application/json or text/plain"
MISSING_TENANT_HEADER = "Missing X-Tenant-ID header"
MISSING_REQUIRED_FIELDS = "Missing required fields: tenant_id and text"


class QueuePublisher(Protocol):
    def publish(self, envelope: LogEnvelope) -> str:
        ...


@dataclass(frozen=True)
class ValidationFailure:
    """A submission rejected for a client-caused reason"""
    message: str


@dataclass(frozen=True)
class IntakeResult:
    """HTTP-level outcome of one submission"""
    status_code: int
    body: Dict[str, str] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return self.status_code == 202

    @property
    def log_id(self) -> Optional[str]:
        return self.body.get('log_id')


def new_log_id() -> str:
    return str(uuid.uuid4())


def _parse_json_submission(body: bytes) -> IngestJSONRequest:
    # Decode, JSON and type errors propagate and become internal errors
    data = json.loads(body.decode('utf-8'))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return IngestJSONRequest.model_validate(data)


def parse_submission(request: IntakeRequest) -> Union[LogEnvelope, ValidationFailure]:
    """
    Validate a submission and build its envelope.

    Structured bodies take tenant_id, text and an optional log_id from the
    JSON object. Plain text bodies take the tenant from the X-Tenant-ID
    header and always get a generated log_id.

    Args:
        request: The submission to validate

    Returns:
        The envelope to enqueue, or the reason the submission is rejected

    Raises:
        ValueError: If a structured body is not a JSON object with string
            fields, or a body is not UTF-8 (pydantic ValidationError and
            JSONDecodeError are both ValueError subclasses)
    """
    if request.is_json:
        parsed = _parse_json_submission(request.body)
        tenant_id = parsed.tenant_id
        text = parsed.text
        log_id = parsed.log_id if not is_blank(parsed.log_id) else new_log_id()
        source = Source.JSON

    elif request.is_text:
        if is_blank(request.tenant_header):
            return ValidationFailure(MISSING_TENANT_HEADER)
        text = request.body.decode('utf-8')
        tenant_id = request.tenant_header
        # A caller supplied log_id is not honoured on this path
        log_id = new_log_id()
        source = Source.TEXT_UPLOAD

    else:
        return ValidationFailure(UNSUPPORTED_CONTENT_TYPE)

    if is_blank(tenant_id) or is_blank(text):
        return ValidationFailure(MISSING_REQUIRED_FIELDS)

    return LogEnvelope(tenant_id=tenant_id, log_id=log_id, text=text, source=source)


class IntakeService:
    """Validates submissions and hands accepted envelopes to the queue"""

    def __init__(self, publisher: QueuePublisher):
        self.publisher = publisher

    def submit(self, request: IntakeRequest) -> IntakeResult:
        """
        Validate and enqueue one submission

        Args:
            request: The submission

        Returns:
            202 with the log_id when enqueued, 400 on validation failure,
            500 on any unexpected error. Enqueue failures are not retried.
        """
        try:
            outcome = parse_submission(request)
            if isinstance(outcome, ValidationFailure):
                logger.warning(f"Rejected submission: {outcome.message}")
                return IntakeResult(400, error_body(outcome.message))

            self.publisher.publish(outcome)
            logger.info(f"Accepted log {outcome.log_id} for tenant {outcome.tenant_id} via {outcome.source.value}")
            return IntakeResult(202, accepted_body(outcome.log_id))

        except Exception as e:
            logger.error(f"Unexpected error handling submission: {str(e)}", exc_info=True)
            return IntakeResult(500, error_body(f"Internal server error: {str(e)}"))
