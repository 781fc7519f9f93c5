"""
Thin DynamoDB Table Gateway

A lightweight wrapper around the boto3 Table resource used by the DynamoDB
data-operation backend. The gateway:

1. Creates boto3 resource/table handles lazily from HandlerConfig
2. Exposes the four single-table calls the backend needs (get, put, delete, scan)
3. Maps boto3 ClientErrors to backend exceptions in one place

Anything richer (queries, transactions) belongs to a dedicated backend, not here.
"""

import logging
from typing import Any, Dict, Iterator, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import HandlerConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    ItemNotFoundError,
    ValidationError,
    RetryableError
)

logger = logging.getLogger(__name__)

# DynamoDB error code -> (backend exception, message prefix)
_ERROR_FAMILIES = {
    'ConditionalCheckFailedException': (ConflictError, "Conditional check failed"),
    'TransactionConflictException': (ConflictError, "Conflict"),
    'ResourceInUseException': (ConflictError, "Conflict"),
    'ValidationException': (ValidationError, "Validation failed"),
    'ItemCollectionSizeLimitExceededException': (ValidationError, "Item collection size limit exceeded"),
    'ProvisionedThroughputExceededException': (RetryableError, "Throttling"),
    'RequestLimitExceeded': (RetryableError, "Throttling"),
    'ThrottlingException': (RetryableError, "Throttling"),
    'InternalServerError': (RetryableError, "Service unavailable"),
    'ServiceUnavailable': (RetryableError, "Service unavailable"),
    'RequestTimeoutException': (RetryableError, "Request timeout"),
    'RequestExpiredException': (RetryableError, "Request timeout"),
    'UnrecognizedClientException': (ConnectionError, "Authentication/authorization failed"),
    'AccessDeniedException': (ConnectionError, "Authentication/authorization failed"),
    'ExpiredTokenException': (ConnectionError, "Token expired"),
    'TokenRefreshRequiredException': (ConnectionError, "Token expired"),
}


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map a DynamoDB ClientError to a backend exception.

    Args:
        error: The boto3 ClientError
        operation: The DynamoDB call that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional resource identifier for context

    Returns:
        Backend exception wrapping ``error``
    """
    details = error.response.get('Error', {})
    error_code = details.get('Code', 'Unknown')
    where = f"{operation} on {table_name}" + (f" (resource: {resource_id})" if resource_id else "")
    full_message = f"{where}: {details.get('Message', '')}"

    if error_code == 'ResourceNotFoundException':
        if resource_id:
            return ItemNotFoundError(table_name, {'resource_id': resource_id}, original_error=error)
        return ConnectionError(f"Table not found - {full_message}", original_error=error)

    family = _ERROR_FAMILIES.get(error_code)
    if family is None:
        logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
        return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)

    exception_class, prefix = family
    message = f"{prefix} - {full_message}"
    if exception_class is ConflictError:
        return ConflictError(message, resource_id, original_error=error)
    return exception_class(message, original_error=error)


class TableGateway:
    """
    Thin gateway for a single DynamoDB table.

    boto3 resources are created on first use and are not thread-safe, so the
    backend builds one gateway per worker thread.
    """

    def __init__(self, config: HandlerConfig, table_name: str):
        """
        Args:
            config: Handler configuration
            table_name: Full name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    def _client_config(self) -> Config:
        return Config(
            retries={'max_attempts': self.config.retries},
            max_pool_connections=self.config.max_pool_connections,
            read_timeout=self.config.timeout_seconds,
            connect_timeout=self.config.timeout_seconds
        )

    @property
    def dynamodb(self):
        """DynamoDB service resource, created on first access."""
        if self._dynamodb is not None:
            return self._dynamodb
        try:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )
            resource_kwargs = {'region_name': self.config.region_name, 'config': self._client_config()}
            if self.config.endpoint_url:
                resource_kwargs['endpoint_url'] = self.config.endpoint_url
            self._dynamodb = session.resource('dynamodb', **resource_kwargs)
        except Exception as e:
            logger.error(f"Failed to create DynamoDB resource: {e}")
            raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table handle for ``table_name``."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def get_item(self, key: Dict[str, Any], consistent_read: bool = True) -> Optional[Dict[str, Any]]:
        """
        Get a single item by primary key.

        Args:
            key: Primary key of the item
            consistent_read: Strongly consistent read, so an insert is visible to
                             the read-back that follows it

        Returns:
            The item, or None if it does not exist
        """
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _resource_id(key)) from e
        return response.get('Item')

    def put_item(self, item: Dict[str, Any], condition_expression=None, resource_id: Optional[str] = None) -> None:
        """
        Write one item.

        Example:
            gateway.put_item(
                item={'Id': 42, 'Name': 'Alice'},
                condition_expression=Attr('Id').not_exists(),
                resource_id='42'
            )
        """
        request = {'Item': item}
        if condition_expression is not None:
            request['ConditionExpression'] = condition_expression
        try:
            self.table.put_item(**request)
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, resource_id) from e
        logger.debug(f"Put item in {self.table_name}: {resource_id}")

    def delete_item(
        self,
        key: Dict[str, Any],
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Delete one item.

        Returns:
            The deleted attributes when ``return_values`` asks for them
        """
        request = {'Key': key, 'ReturnValues': return_values}
        if condition_expression is not None:
            request['ConditionExpression'] = condition_expression
        try:
            response = self.table.delete_item(**request)
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, _resource_id(key)) from e
        logger.debug(f"Deleted item from {self.table_name}: {key}")
        if return_values == 'NONE':
            return None
        return response.get('Attributes')

    def scan(self, **kwargs) -> Dict[str, Any]:
        """One Scan page, kwargs passed straight to boto3."""
        try:
            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e

    def scan_all(self, **kwargs) -> Iterator[Dict[str, Any]]:
        """
        Yield every item in the table, following LastEvaluatedKey pages.

        Items are yielded in the order DynamoDB returns them.
        """
        scan_kwargs = dict(kwargs)
        while True:
            response = self.scan(**scan_kwargs)
            yield from response.get('Items', [])
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_key


def _resource_id(key: Dict[str, Any]) -> Optional[str]:
    if len(key) == 1:
        return str(next(iter(key.values())))
    return None


def create_table_gateway(config: HandlerConfig, base_name: str) -> TableGateway:
    """Build a gateway for ``base_name`` with the configured prefix and environment applied."""
    return TableGateway(config, config.get_table_name(base_name))
