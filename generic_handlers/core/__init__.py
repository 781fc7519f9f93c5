"""
Core data-operation components.

This module contains the storage side of the pipeline:
- DataOperations: the capability protocol handlers are written against
- TableGateway: thin wrapper over boto3 DynamoDB table calls
- DynamoDBDataOperations: DataOperations over named table bindings
"""

from .protocols import DataOperations
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error
from .dynamodb_operations import DynamoDBDataOperations, OperationAction, TableOperation
from .items import item_to_record, record_to_item

__all__ = [
    "DataOperations",
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
    "DynamoDBDataOperations",
    "OperationAction",
    "TableOperation",
    "item_to_record",
    "record_to_item",
]
