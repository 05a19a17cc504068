#!/usr/bin/env python3
"""
Log processor entry points
Supports Lambda runtime, SQS polling, and manual input modes
"""

import argparse
import logging
import os
import sys
import time
from typing import Any, Dict, List

import boto3

from log_common.errors import ConfigurationError
from log_common.validation_utils import require_env
from log_processor.processor import LogProcessor, ProcessingResult
from log_processor.store import ProcessedLogStore

LOG_LEVEL = getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Lambda installs its own root handler before this module is imported
root_logger = logging.getLogger()
root_logger.setLevel(LOG_LEVEL)
for handler in root_logger.handlers:
    handler.setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)

# Environment variables
AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')

# Built on first invocation and reused across warm invocations
_processor = None


def build_processor() -> LogProcessor:
    """Create a processor wired to the DynamoDB table named by TABLE_NAME"""
    store = ProcessedLogStore(
        table_name=os.environ.get('TABLE_NAME'),
        region=os.environ.get('AWS_REGION', AWS_REGION)
    )
    return LogProcessor(
        store,
        delay_per_char=float(os.environ.get('PROCESSING_DELAY_PER_CHAR', '0')),
        max_delay=float(os.environ.get('MAX_PROCESSING_DELAY', '800'))
    )


def get_processor() -> LogProcessor:
    global _processor
    if _processor is None:
        _processor = build_processor()
    return _processor


def batch_item_failures(results: List[ProcessingResult]) -> List[Dict[str, str]]:
    """SQS partial batch response entries for the messages to redeliver"""
    return [{'itemIdentifier': result.message_id} for result in results if result.should_retry]


def lambda_handler(event: Dict[str, Any], context) -> Dict[str, Any]:
    """
    AWS Lambda handler for processing SQS messages containing log envelopes

    Returns batchItemFailures to enable partial batch failure handling.
    Failed messages will be retried by SQS.
    """
    records = event.get('Records', [])
    logger.info(f"Processing {len(records)} SQS messages")

    results = get_processor().process_batch(records)
    failures = batch_item_failures(results)

    logger.info(f"Processing complete. Success: {len(results) - len(failures)}, Failed: {len(failures)}")

    return {
        'batchItemFailures': failures
    }


def sqs_polling_mode():
    """
    SQS polling mode for local testing
    Continuously polls SQS queue and processes messages
    """
    try:
        queue_url = require_env('QUEUE_URL')
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    sqs_client = boto3.client('sqs', region_name=AWS_REGION)
    processor = get_processor()
    logger.info(f"Starting SQS polling mode for queue: {queue_url}")

    while True:
        try:
            response = sqs_client.receive_message(
                QueueUrl=queue_url,
                MaxNumberOfMessages=10,
                WaitTimeSeconds=20,  # Long polling
                VisibilityTimeout=300
            )

            messages = response.get('Messages', [])
            if not messages:
                logger.info("No messages received, continuing to poll...")
                continue

            logger.info(f"Received {len(messages)} messages from SQS")

            for message in messages:
                result = processor.process_sqs_record({
                    'body': message['Body'],
                    'messageId': message['MessageId'],
                    'receiptHandle': message['ReceiptHandle']
                })

                if result.should_retry:
                    # Left on the queue; reappears after the visibility timeout
                    continue

                try:
                    sqs_client.delete_message(
                        QueueUrl=queue_url,
                        ReceiptHandle=message['ReceiptHandle']
                    )
                    logger.info(f"Successfully deleted message {message['MessageId']}")
                except Exception as delete_error:
                    logger.error(f"Failed to delete message {message['MessageId']}: {str(delete_error)}")

        except KeyboardInterrupt:
            logger.info("Received interrupt signal, shutting down...")
            break
        except Exception as e:
            logger.error(f"Error in SQS polling: {str(e)}")
            time.sleep(5)


def manual_input_mode():
    """
    Manual input mode for development/testing
    Reads one log envelope as JSON from stdin and processes it
    """
    logger.info("Manual input mode - reading JSON from stdin")
    logger.info("Expected format: {\"tenant_id\": ..., \"log_id\": ..., \"text\": ..., \"source\": ...}")

    input_data = sys.stdin.read().strip()
    if not input_data:
        logger.error("No input data provided")
        sys.exit(1)

    result = get_processor().process_sqs_record({
        'body': input_data,
        'messageId': 'manual-input',
        'receiptHandle': 'manual'
    })

    if result.should_retry:
        logger.error(f"Error processing manual input: {result.error}")
        sys.exit(1)

    logger.info("Successfully processed manual input")


def main(argv=None):
    """
    Main entry point for standalone execution
    """
    parser = argparse.ArgumentParser(description='Multi-tenant log processor')
    parser.add_argument('--mode', choices=['sqs', 'manual'], default='sqs',
                        help='Execution mode: sqs (poll queue) or manual (stdin input)')

    args = parser.parse_args(argv)

    if args.mode == 'sqs':
        sqs_polling_mode()
    elif args.mode == 'manual':
        manual_input_mode()


if __name__ == '__main__':
    main()
