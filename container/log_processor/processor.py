"""
Per-message processing: envelope in, processed record stored
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from log_common.models import LogEnvelope, ProcessedRecord
from log_processor.transform import redact, simulate_processing_delay

logger = logging.getLogger(__name__)


class InvalidEnvelopeError(Exception):
    """Raised when a queue message body is not a valid log envelope"""
    pass


class RecordStore(Protocol):
    def put_record(self, record: ProcessedRecord) -> None:
        ...


class ProcessingStatus(str, Enum):
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one queue message; retryable failures go back to the queue"""
    message_id: str
    status: ProcessingStatus
    error: Optional[str] = None

    @property
    def should_retry(self) -> bool:
        return self.status is ProcessingStatus.RETRYABLE_FAILURE


def parse_envelope(body: Any) -> LogEnvelope:
    """
    Parse a queue message body into an envelope

    Raises:
        InvalidEnvelopeError: If the body is not a JSON envelope
    """
    if not isinstance(body, (str, bytes)):
        raise InvalidEnvelopeError(f"Invalid message body type: {type(body).__name__}")
    try:
        return LogEnvelope.from_message_body(body)
    except ValidationError as e:
        raise InvalidEnvelopeError(f"Invalid message format: {e.error_count()} validation error(s)") from e


class LogProcessor:
    """
    Redacts log envelopes and persists the resulting records.

    Collaborators are injected; the processor never creates AWS clients
    itself.
    """

    def __init__(
        self,
        store: RecordStore,
        delay_per_char: float = 0.0,
        max_delay: float = 800.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.store = store
        self.delay_per_char = delay_per_char
        self.max_delay = max_delay
        self.sleep = sleep
        self.clock = clock

    def process_envelope(self, envelope: LogEnvelope) -> ProcessedRecord:
        """
        Transform one envelope and write its record

        Persisting is the last step, so a failure earlier leaves the table
        untouched.
        """
        logger.info(f"Processing log {envelope.log_id} for tenant {envelope.tenant_id}")

        simulate_processing_delay(envelope.text, self.delay_per_char, self.max_delay, sleep=self.sleep)

        record = ProcessedRecord(
            tenant_id=envelope.tenant_id,
            log_id=envelope.log_id,
            source=envelope.source,
            original_text=envelope.text,
            modified_text=redact(envelope.text),
            processed_at=self.clock()
        )
        self.store.put_record(record)

        logger.info(f"Successfully processed log: {envelope.log_id}")
        return record

    def process_sqs_record(self, sqs_record: Dict[str, Any]) -> ProcessingResult:
        """
        Process a single SQS record

        Never raises; any failure is returned as a retryable result.
        """
        message_id = sqs_record.get('messageId', 'unknown')
        try:
            envelope = parse_envelope(sqs_record.get('body'))
            self.process_envelope(envelope)
            return ProcessingResult(message_id, ProcessingStatus.SUCCESS)
        except Exception as e:
            logger.error(f"Error processing record {message_id}: {str(e)}. Message will be retried.", exc_info=True)
            return ProcessingResult(message_id, ProcessingStatus.RETRYABLE_FAILURE, error=str(e))

    def process_batch(self, sqs_records: Iterable[Dict[str, Any]]) -> List[ProcessingResult]:
        """Process records one at a time; a failure never stops the rest of the batch"""
        return [self.process_sqs_record(record) for record in sqs_records]
