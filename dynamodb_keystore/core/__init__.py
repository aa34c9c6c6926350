"""
Core infrastructure components for DynamoDB operations.

- TableGateway: Thin wrapper over boto3 single-item operations
- map_dynamodb_error: botocore ClientError to keystore exception mapping
- Factory functions for creating gateways
"""

from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
]
