"""
SQS service layer for handing log envelopes to the processing queue
"""

from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from log_common.errors import ConfigurationError
from log_common.models import LogEnvelope
from log_intake.utils.logger import get_logger

logger = get_logger('queue')


class QueuePublishError(Exception):
    """Raised when SQS rejects or fails a send"""
    pass


class SQSQueuePublisher:
    """
    Publishes log envelopes to an SQS queue, one message per envelope.

    The queue URL may be left unset at construction; a missing URL is
    reported as a ConfigurationError on the first publish.
    """

    def __init__(self, queue_url: Optional[str], region: str = "us-east-1"):
        """
        Initialize the queue publisher

        Args:
            queue_url: URL of the destination SQS queue
            region: AWS region for SQS
        """
        self.queue_url = queue_url
        self.region = region
        self._sqs = None

    @property
    def sqs(self):
        """Lazy initialization of SQS client"""
        if self._sqs is None:
            self._sqs = boto3.client('sqs', region_name=self.region)
        return self._sqs

    def _require_queue_url(self) -> str:
        if not self.queue_url:
            raise ConfigurationError("QUEUE_URL environment variable not set")
        return self.queue_url

    def publish(self, envelope: LogEnvelope) -> str:
        """
        Send one envelope to the queue

        Args:
            envelope: Validated log envelope

        Returns:
            SQS message ID of the sent message

        Raises:
            ConfigurationError: If no queue URL is configured
            QueuePublishError: If SQS fails the send
        """
        queue_url = self._require_queue_url()
        try:
            response = self.sqs.send_message(
                QueueUrl=queue_url,
                MessageBody=envelope.to_message_body()
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"SQS error sending log {envelope.log_id} for tenant {envelope.tenant_id}: {error_code}")
            raise QueuePublishError(f"Failed to enqueue log: {error_code}")

        message_id = response.get('MessageId', '')
        logger.info(f"Enqueued log {envelope.log_id} for tenant {envelope.tenant_id} as message {message_id}")
        return message_id

    def get_queue_attributes(self) -> Dict[str, Any]:
        """
        Fetch queue attributes, used to verify the queue is reachable

        Raises:
            ConfigurationError: If no queue URL is configured
            QueuePublishError: If SQS fails the request
        """
        queue_url = self._require_queue_url()
        try:
            response = self.sqs.get_queue_attributes(
                QueueUrl=queue_url,
                AttributeNames=['ApproximateNumberOfMessages']
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"SQS error reading queue attributes: {error_code}")
            raise QueuePublishError(f"Failed to read queue attributes: {error_code}")
        return response.get('Attributes', {})
