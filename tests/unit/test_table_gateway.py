"""
Tests for TableGateway (core/table_gateway.py)

These tests verify the thin DynamoDB wrapper and its ClientError mapping.
"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from generic_handlers.config import HandlerConfig
from generic_handlers.core.table_gateway import TableGateway, create_table_gateway, map_dynamodb_error
from generic_handlers.exceptions import (
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    RetryableError,
    ValidationError,
)


def create_client_error(error_code: str, message: str = "Test error") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name='TestOperation'
    )


@pytest.fixture
def mock_config():
    """Configuration for testing."""
    return HandlerConfig(
        region_name="us-east-1",
        table_prefix="test",
        environment="dev",
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret"
    )


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.get_item.return_value = {}
    table.scan.return_value = {'Items': []}
    table.put_item.return_value = None
    table.delete_item.return_value = {'Attributes': {}}
    return table


@pytest.fixture
def gateway(mock_config, mock_table):
    """Gateway with its table handle pre-set."""
    gateway = TableGateway(mock_config, "test_table")
    gateway._table = mock_table
    return gateway


class TestTableGatewayResources:
    """Lazy boto3 resource creation."""

    def test_initialization(self, mock_config):
        """Test TableGateway initialization."""
        gateway = TableGateway(mock_config, "test_table")

        assert gateway.config == mock_config
        assert gateway.table_name == "test_table"
        assert gateway._dynamodb is None
        assert gateway._table is None

    def test_dynamodb_property_reuses_instance(self, mock_config):
        """Test that DynamoDB resource is created once."""
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_dynamodb = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = mock_dynamodb

            gateway = TableGateway(mock_config, "test_table")

            assert gateway.dynamodb is gateway.dynamodb is mock_dynamodb
            mock_session_class.assert_called_once()
            _, kwargs = mock_session.resource.call_args
            assert kwargs['region_name'] == "us-east-1"
            assert 'endpoint_url' not in kwargs

    def test_endpoint_url_passed_through(self):
        """Test local endpoints reach boto3."""
        config = HandlerConfig.for_local_development()
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session

            _ = TableGateway(config, "t").dynamodb

            _, kwargs = mock_session.resource.call_args
            assert kwargs['endpoint_url'] == "http://localhost:8000"

    def test_dynamodb_connection_error(self, mock_config):
        """Test DynamoDB connection error handling."""
        with patch('boto3.Session') as mock_session_class:
            mock_session_class.side_effect = Exception("Connection failed")

            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ConnectionError, match="Failed to connect to DynamoDB"):
                _ = gateway.dynamodb

    def test_table_property(self, mock_config):
        """Test table handle creation."""
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_dynamodb = Mock()
            mock_table = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = mock_dynamodb
            mock_dynamodb.Table.return_value = mock_table

            gateway = TableGateway(mock_config, "test_table")

            assert gateway.table is mock_table
            mock_dynamodb.Table.assert_called_once_with("test_table")


class TestTableGatewayOperations:
    """Item operations."""

    def test_get_item_found(self, gateway, mock_table):
        """Test get_item returns the item with a consistent read."""
        mock_table.get_item.return_value = {'Item': {'Id': 1}}

        assert gateway.get_item({'Id': 1}) == {'Id': 1}
        mock_table.get_item.assert_called_once_with(Key={'Id': 1}, ConsistentRead=True)

    def test_get_item_missing(self, gateway):
        """Test get_item returns None when absent."""
        assert gateway.get_item({'Id': 1}) is None

    def test_put_item_with_condition(self, gateway, mock_table):
        """Test put_item passes the condition."""
        condition = Mock()

        gateway.put_item({'Id': 1}, condition_expression=condition, resource_id="1")

        mock_table.put_item.assert_called_once_with(Item={'Id': 1}, ConditionExpression=condition)

    def test_put_item_conflict(self, gateway, mock_table):
        """Test conditional failures map to ConflictError."""
        mock_table.put_item.side_effect = create_client_error('ConditionalCheckFailedException')

        with pytest.raises(ConflictError) as exc_info:
            gateway.put_item({'Id': 1}, resource_id="1")

        assert exc_info.value.resource_id == "1"

    def test_delete_item(self, gateway, mock_table):
        """Test delete_item default return values."""
        assert gateway.delete_item({'Id': 1}) is None
        mock_table.delete_item.assert_called_once_with(Key={'Id': 1}, ReturnValues='NONE')

    def test_scan_all_follows_pages(self, gateway, mock_table):
        """Test scan_all yields every page in order."""
        mock_table.scan.side_effect = [
            {'Items': [{'Id': 1}, {'Id': 2}], 'LastEvaluatedKey': {'Id': 2}},
            {'Items': [{'Id': 3}]},
        ]

        assert list(gateway.scan_all()) == [{'Id': 1}, {'Id': 2}, {'Id': 3}]
        assert mock_table.scan.call_args_list[1].kwargs == {'ExclusiveStartKey': {'Id': 2}}

    def test_scan_error(self, gateway, mock_table):
        """Test scan errors are mapped."""
        mock_table.scan.side_effect = create_client_error('ResourceNotFoundException', 'Requested resource not found')

        with pytest.raises(ConnectionError, match="Table not found"):
            list(gateway.scan_all())

    def test_create_table_gateway_prefixes_name(self, mock_config):
        """Test the factory applies prefix and environment."""
        assert create_table_gateway(mock_config, "customers").table_name == "test_dev_customers"


class TestErrorMapping:
    """ClientError -> backend exception mapping."""

    @pytest.mark.parametrize("code, expected", [
        ('ConditionalCheckFailedException', ConflictError),
        ('TransactionConflictException', ConflictError),
        ('ValidationException', ValidationError),
        ('ProvisionedThroughputExceededException', RetryableError),
        ('ThrottlingException', RetryableError),
        ('InternalServerError', RetryableError),
        ('AccessDeniedException', ConnectionError),
        ('ExpiredTokenException', ConnectionError),
        ('SomethingNew', ConnectionError),
    ])
    def test_mapping(self, code, expected):
        """Test each error code family."""
        error = create_client_error(code, "details here")

        result = map_dynamodb_error(error, 'PutItem', 'test_table', 'id-1')

        assert isinstance(result, expected)
        assert result.original_error is error
        assert "details here" in str(result)

    def test_resource_not_found_with_id(self):
        """Test ResourceNotFoundException with a resource id is ItemNotFoundError."""
        result = map_dynamodb_error(create_client_error('ResourceNotFoundException'), 'GetItem', 'test_table', '7')

        assert isinstance(result, ItemNotFoundError)
        assert result.key == {'resource_id': '7'}
