"""
Test configuration and fixtures for unit tests
"""
import os
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

TEST_REGION = 'us-east-1'
TEST_TABLE_NAME = 'test-processed-logs'
TEST_QUEUE_NAME = 'test-log-queue'


@pytest.fixture
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
    os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    os.environ['AWS_SECURITY_TOKEN'] = 'testing'
    os.environ['AWS_SESSION_TOKEN'] = 'testing'
    os.environ['AWS_DEFAULT_REGION'] = TEST_REGION


@pytest.fixture
def mock_aws_services(aws_credentials):
    """Mock all AWS services."""
    with mock_aws():
        yield


@pytest.fixture
def sqs_queue_url(mock_aws_services):
    """Create a mocked SQS queue and return its URL"""
    sqs = boto3.client('sqs', region_name=TEST_REGION)
    return sqs.create_queue(QueueName=TEST_QUEUE_NAME)['QueueUrl']


@pytest.fixture
def dynamodb_table(mock_aws_services):
    """Create a mocked DynamoDB table with the PK/SK composite key schema"""
    dynamodb = boto3.resource('dynamodb', region_name=TEST_REGION)

    table = dynamodb.create_table(
        TableName=TEST_TABLE_NAME,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"}
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"}
        ],
        BillingMode="PAY_PER_REQUEST"
    )

    yield table


@pytest.fixture
def processed_log_store(dynamodb_table):
    """Create a ProcessedLogStore instance backed by the mocked table"""
    from log_processor.store import ProcessedLogStore
    return ProcessedLogStore(table_name=TEST_TABLE_NAME, region=TEST_REGION)


@pytest.fixture
def mock_publisher():
    """Queue publisher double recording published envelopes"""
    publisher = MagicMock()
    publisher.queue_url = 'https://sqs.us-east-1.amazonaws.com/123456789012/test-log-queue'
    publisher.publish.return_value = 'message-id-1'
    return publisher


@pytest.fixture
def environment_variables():
    """Set up test environment variables."""
    test_env = {
        'TABLE_NAME': TEST_TABLE_NAME,
        'QUEUE_URL': 'https://sqs.us-east-1.amazonaws.com/123456789012/test-log-queue',
        'AWS_REGION': TEST_REGION,
        'PROCESSING_DELAY_PER_CHAR': '0',
    }

    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield test_env

    for key, value in original_env.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def sample_envelope_body():
    """Queue message body as produced by the intake API"""
    return '{"tenant_id": "acme", "log_id": "log-001", "text": "call 555-1234", "source": "json"}'
