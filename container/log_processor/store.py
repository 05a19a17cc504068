"""
DynamoDB service layer for processed log records
"""

import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from log_common.errors import ConfigurationError
from log_common.models import ProcessedRecord, partition_key, sort_key

logger = logging.getLogger(__name__)


class DynamoDBError(Exception):
    """Raised for DynamoDB operation errors"""
    pass


class ProcessedLogStore:
    """
    Service class for persisting processed log records in DynamoDB.

    The table uses a composite primary key:
        - Partition key: PK = "TENANT#<tenant_id>"
        - Sort key: SK = "LOG#<log_id>"

    Tenants are isolated by the partition key prefix only. Writes are
    unconditional full-item puts, so a redelivered message replaces the
    record it produced earlier.

    Example item:
        {
            "PK": "TENANT#acme",
            "SK": "LOG#4f1c...",
            "tenant_id": "acme",
            "log_id": "4f1c...",
            "source": "json",
            "original_text": "call 555-1234",
            "modified_data": "call [REDACTED]",
            "processed_at": "2024-06-01T12:00:00+00:00"
        }
    """

    def __init__(self, table_name: Optional[str], region: str = "us-east-1"):
        """
        Initialize the processed log store

        Args:
            table_name: Name of the DynamoDB table
            region: AWS region for DynamoDB
        """
        self.table_name = table_name
        self.region = region
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource"""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource('dynamodb', region_name=self.region)
        return self._dynamodb

    @property
    def table(self):
        """Lazy initialization of DynamoDB table"""
        if self._table is None:
            if not self.table_name:
                raise ConfigurationError("TABLE_NAME environment variable not set")
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def put_record(self, record: ProcessedRecord) -> None:
        """
        Write a processed record, replacing any existing item under its key

        Args:
            record: Fully built record

        Raises:
            ConfigurationError: If no table name is configured
            DynamoDBError: For DynamoDB operation errors
        """
        try:
            self.table.put_item(Item=record.to_item())
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"DynamoDB error writing log {record.log_id} for tenant {record.tenant_id}: {error_code}")
            raise DynamoDBError(f"Failed to write processed log: {error_code}")

        logger.info(f"Stored {record.sort_key} under {record.partition_key}")

    def get_record(self, tenant_id: str, log_id: str) -> Optional[ProcessedRecord]:
        """
        Read a processed record back by tenant and log identifier

        Args:
            tenant_id: The tenant identifier
            log_id: The log identifier

        Returns:
            The stored record, or None if it does not exist

        Raises:
            DynamoDBError: For DynamoDB operation errors
        """
        try:
            response = self.table.get_item(
                Key={
                    'PK': partition_key(tenant_id),
                    'SK': sort_key(log_id)
                }
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"DynamoDB error reading log {log_id} for tenant {tenant_id}: {error_code}")
            raise DynamoDBError(f"Failed to read processed log: {error_code}")

        if 'Item' not in response:
            return None
        return ProcessedRecord.from_item(response['Item'])
