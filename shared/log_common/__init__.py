"""
Data model shared by the intake API and the log processor
"""

from log_common.errors import ConfigurationError
from log_common.models import (
    LogEnvelope,
    ProcessedRecord,
    Source,
    partition_key,
    sort_key,
)

__all__ = [
    'ConfigurationError',
    'LogEnvelope',
    'ProcessedRecord',
    'Source',
    'partition_key',
    'sort_key',
]
