"""
Pydantic models shared by the intake API and the log processor
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field

PARTITION_KEY_PREFIX = "TENANT#"
SORT_KEY_PREFIX = "LOG#"


class Source(str, Enum):
    """Ingestion channel a log entry arrived through"""
    JSON = "json"
    TEXT_UPLOAD = "text_upload"


def partition_key(tenant_id: str) -> str:
    """Partition key isolating all records of one tenant"""
    return f"{PARTITION_KEY_PREFIX}{tenant_id}"


def sort_key(log_id: str) -> str:
    """Sort key for one log entry within a tenant partition"""
    return f"{SORT_KEY_PREFIX}{log_id}"


class LogEnvelope(BaseModel):
    """Normalized log entry as carried on the work queue"""
    tenant_id: str = Field(..., min_length=1, description="Tenant isolation boundary")
    log_id: str = Field(..., min_length=1, description="Caller supplied or generated log identifier")
    text: str = Field(..., min_length=1, description="Raw log payload")
    source: Source = Field(..., description="Ingestion channel")

    def to_message_body(self) -> str:
        """Serialize to the JSON queue message body"""
        return self.model_dump_json()

    @classmethod
    def from_message_body(cls, body: str) -> "LogEnvelope":
        """Parse a JSON queue message body"""
        return cls.model_validate_json(body)


class ProcessedRecord(BaseModel):
    """
    Result of processing one envelope.

    Identity is tenant_id + log_id; processed_at is informational and
    changes when a redelivered message is processed again.
    """
    tenant_id: str
    log_id: str
    source: Source
    original_text: str
    modified_text: str
    processed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def partition_key(self) -> str:
        return partition_key(self.tenant_id)

    @property
    def sort_key(self) -> str:
        return sort_key(self.log_id)

    def to_item(self) -> Dict[str, Any]:
        """DynamoDB item layout for this record"""
        return {
            'PK': self.partition_key,
            'SK': self.sort_key,
            'tenant_id': self.tenant_id,
            'log_id': self.log_id,
            'source': self.source.value,
            'original_text': self.original_text,
            'modified_data': self.modified_text,
            'processed_at': self.processed_at.isoformat(),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ProcessedRecord":
        """Rebuild a record from a stored DynamoDB item"""
        return cls(
            tenant_id=item['tenant_id'],
            log_id=item['log_id'],
            source=item['source'],
            original_text=item['original_text'],
            modified_text=item['modified_data'],
            processed_at=datetime.fromisoformat(item['processed_at']),
        )
