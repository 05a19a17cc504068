"""
Pydantic models for intake request validation
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


class IntakeRequest(BaseModel):
    """Transport-independent shape of one log submission"""
    content_type: str = Field(default="", description="Declared Content-Type header value")
    tenant_header: Optional[str] = Field(default=None, description="X-Tenant-ID header value")
    body: bytes = Field(default=b"", description="Raw request body")

    @property
    def is_json(self) -> bool:
        return JSON_CONTENT_TYPE in self.content_type.lower()

    @property
    def is_text(self) -> bool:
        return TEXT_CONTENT_TYPE in self.content_type.lower()


class IngestJSONRequest(BaseModel):
    """Structured log submission body"""
    model_config = ConfigDict(extra='ignore')

    tenant_id: Optional[StrictStr] = Field(default=None, description="Unique tenant identifier")
    log_id: Optional[StrictStr] = Field(default=None, description="Optional log identifier, generated when absent")
    text: Optional[StrictStr] = Field(default=None, description="Log text")
