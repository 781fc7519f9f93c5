"""
Test configuration and fixtures for generic handlers.

Provides a spy data-operation capability, and mocked DynamoDB
tables for the DynamoDB backend.
"""

import itertools
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from generic_handlers import (
    DataOperations,
    DynamoDBDataOperations,
    HandlerConfig,
    OperationAction,
    TableOperation,
)

from helpers import Customer


@pytest.fixture
def handler_config():
    """Handler configuration for testing."""
    return HandlerConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="gh",
        error_detail="full",
        enable_debug_logging=False
    )


@pytest.fixture
def spy_operations():
    """Data-operation capability spy; every call succeeds unless configured."""
    operations = Mock(spec=DataOperations)
    operations.execute_by_id.return_value = None
    operations.insert.return_value = 42
    operations.fetch_by_id.return_value = Customer(id=42, name="Alice")
    operations.list.return_value = [
        Customer(id=1, name="Alice"),
        Customer(id=2, name="Bob", email="bob@example.com"),
    ]
    return operations


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def customers_table(mock_dynamodb_resource):
    """Create customers table (numeric Id key) for testing."""
    table = mock_dynamodb_resource.create_table(
        TableName='gh_test_customers',
        KeySchema=[
            {'AttributeName': 'Id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'Id', 'AttributeType': 'N'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def customer_operations():
    """Table bindings for the customers table."""
    return [
        TableOperation(name="customer_insert", table="customers", action=OperationAction.PUT),
        TableOperation(name="customer_get", table="customers", action=OperationAction.GET),
        TableOperation(name="customer_delete", table="customers", action=OperationAction.DELETE),
        TableOperation(name="customer_list", table="customers", action=OperationAction.SCAN),
    ]


@pytest.fixture
def dynamodb_operations(handler_config, customers_table, customer_operations):
    """DynamoDB backend over a mocked customers table with sequential integer ids."""
    counter = itertools.count(1)
    return DynamoDBDataOperations(handler_config, customer_operations, id_factory=lambda: next(counter))
