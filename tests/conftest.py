"""
Test configuration and fixtures for the DynamoDB keystore.

Provides a moto-backed keystore table, adapters over both storage backends
and a parametrized ``keyspace`` fixture for contract tests.
"""

import boto3
import pytest
from moto import mock_aws

from dynamodb_keystore import (
    DynamoDBConfig,
    KeystoreAdapter,
    MemoryBackend,
    create_dynamodb_adapter,
)

TABLE_NAME = "unit_test_keystore"


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="unit",
        table_name="keystore",
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


def create_keystore_table(dynamodb, table_name, keyspace_attribute='keyspace', key_attribute='key'):
    """Create a keystore table: keyspace partition key, key sort key."""
    return dynamodb.create_table(
        TableName=table_name,
        KeySchema=[
            {'AttributeName': keyspace_attribute, 'KeyType': 'HASH'},
            {'AttributeName': key_attribute, 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': keyspace_attribute, 'AttributeType': 'S'},
            {'AttributeName': key_attribute, 'AttributeType': 'S'}
        ],
        BillingMode='PROVISIONED',
        ProvisionedThroughput={'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
    )


@pytest.fixture
def table_factory(mock_dynamodb_resource):
    """Create extra keystore tables in the mocked DynamoDB."""
    def _create(table_name, **attributes):
        return create_keystore_table(mock_dynamodb_resource, table_name, **attributes)
    return _create


@pytest.fixture
def keystore_table(mock_dynamodb_resource):
    """Create the keystore table for testing."""
    return create_keystore_table(mock_dynamodb_resource, TABLE_NAME)


@pytest.fixture
def dynamodb_adapter(mock_dynamodb_config, keystore_table):
    """Keystore adapter backed by the mocked DynamoDB table."""
    return create_dynamodb_adapter(mock_dynamodb_config)


@pytest.fixture
def memory_backend():
    """In-memory storage backend."""
    return MemoryBackend()


@pytest.fixture
def memory_adapter(memory_backend):
    """Keystore adapter backed by the in-memory backend."""
    return KeystoreAdapter(memory_backend)


@pytest.fixture(params=["memory", "dynamodb"])
def adapter(request):
    """Keystore adapter for each storage backend."""
    if request.param == "memory":
        return request.getfixturevalue("memory_adapter")
    return request.getfixturevalue("dynamodb_adapter")


@pytest.fixture
def keyspace(adapter):
    """Keyspace under test, once per storage backend."""
    return adapter.get_keyspace("coolKeyspace")
