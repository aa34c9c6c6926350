"""
Thin DynamoDB Table Gateway

This module provides a lightweight wrapper around the boto3 Table resource
for single-item operations. The gateway:

1. Creates the boto3 session once and a resource and Table handle per thread, lazily
2. Exposes GetItem/PutItem/UpdateItem/DeleteItem with their native parameters
3. Maps botocore ClientErrors to keystore exceptions

It knows nothing about keyspaces, attribute roles or version tokens; the
DynamoDB storage backend composes these operations into the keystore's
conditional-write protocol.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import (
    ConditionFailedError,
    ConflictError,
    ConnectionError,
    RetryableError,
    TableNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to keystore exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional resource identifier for context

    Returns:
        ConditionFailedError for conditional check failures, otherwise the
        exception describing the backend failure (ConflictError,
        TableNotFoundError, ValidationError, RetryableError or ConnectionError)
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error']['Message']

    # Build context for error message
    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConditionFailedError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'TransactionConflictException':
        return ConflictError(f"Transaction conflict - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        return TableNotFoundError(table_name, original_error=error)

    elif error_code == 'ValidationException':
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code == 'ItemCollectionSizeLimitExceededException':
        return ValidationError(f"Item collection size limit exceeded - {full_message}", original_error=error)

    elif error_code in ['ProvisionedThroughputExceededException', 'RequestLimitExceeded', 'ThrottlingException']:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in ['InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException']:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in ['RequestTimeoutException', 'RequestExpiredException']:
        return RetryableError(f"Request timeout - {full_message}", original_error=error)

    elif error_code in ['UnrecognizedClientException', 'AccessDeniedException']:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    elif error_code in ['ExpiredTokenException', 'TokenRefreshRequiredException']:
        return ConnectionError(f"Token expired - {full_message}", original_error=error)

    elif error_code in ['InvalidEndpointException', 'IncompleteSignatureException', 'InvalidSignatureException']:
        return ConnectionError(f"Invalid endpoint or signature - {full_message}", original_error=error)

    # Default to ConnectionError for unknown errors
    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


def _resource_id(key: Dict[str, Any]) -> str:
    """Render a primary key as 'partition/sort' for error context."""
    return "/".join(str(v) for v in key.values())


class TableGateway:
    """
    Thin gateway for single-item DynamoDB table operations.

    Every method is a pass-through to the boto3 Table resource with error
    mapping; conditions are boto3 condition objects built by the caller.

    One gateway may serve many threads. The boto3 session is created once,
    under a lock, and each thread gets its own resource and Table handle
    because boto3 resources must not be shared between threads.
    """

    def __init__(self, config: DynamoDBConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: DynamoDB configuration
            table_name: Full name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._session = None
        self._lock = threading.Lock()
        self._local = threading.local()

    def _create_resource(self):
        """Create a DynamoDB resource from the shared session (caller holds the lock)."""
        if self._session is None:
            self._session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )

        dynamodb_config = {
            'region_name': self.config.region_name
        }

        if self.config.endpoint_url:
            dynamodb_config['endpoint_url'] = self.config.endpoint_url

        boto_config = Config(
            retries={'max_attempts': self.config.retries},
            max_pool_connections=self.config.max_pool_connections,
            read_timeout=self.config.timeout_seconds,
            connect_timeout=self.config.timeout_seconds
        )
        dynamodb_config['config'] = boto_config

        return self._session.resource('dynamodb', **dynamodb_config)

    @property
    def dynamodb(self):
        """Lazy initialization of this thread's DynamoDB resource."""
        resource = getattr(self._local, 'dynamodb', None)
        if resource is None:
            try:
                with self._lock:
                    resource = self._create_resource()
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
            self._local.dynamodb = resource
        return resource

    @property
    def table(self):
        """Get this thread's boto3 DynamoDB Table resource."""
        table = getattr(self._local, 'table', None)
        if table is None:
            try:
                table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
            self._local.table = table
        return table

    def get_item(
        self,
        key: Dict[str, Any],
        consistent_read: bool = True,
        projection_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Read a single item by primary key.

        Args:
            key: Primary key of the item
            consistent_read: Strongly consistent read when True
            projection_expression: Optional projection (use name placeholders)
            expression_attribute_names: Placeholders used by the projection

        Returns:
            The item, or None if no item is stored under the key
        """
        try:
            get_kwargs = {
                'Key': key,
                'ConsistentRead': consistent_read
            }
            if projection_expression:
                get_kwargs['ProjectionExpression'] = projection_expression
            if expression_attribute_names:
                get_kwargs['ExpressionAttributeNames'] = expression_attribute_names

            response = self.table.get_item(**get_kwargs)
            logger.debug(f"Got item from {self.table_name}: {key} (found={'Item' in response})")
            return response.get('Item')
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _resource_id(key)) from e

    def put_item(self, item: Dict[str, Any], key_attributes: List[str], condition_expression=None) -> None:
        """
        Put item into DynamoDB table.

        Args:
            item: Item to store
            key_attributes: Names of the primary key attributes (for logging and errors)
            condition_expression: Optional condition for put operation

        Example:
            gateway.put_item(
                item={'keyspace': 'users', 'key': 'alice', 'value': '...', 'version': 42},
                key_attributes=['keyspace', 'key'],
                condition_expression=Attr('key').not_exists()
            )
        """
        key = {name: item.get(name) for name in key_attributes}
        try:
            put_kwargs = {'Item': item}
            if condition_expression is not None:
                put_kwargs['ConditionExpression'] = condition_expression

            self.table.put_item(**put_kwargs)
            logger.info(f"Put item in {self.table_name}: {key}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, _resource_id(key)) from e

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Update item in DynamoDB table.

        Args:
            key: Primary key of item to update
            update_expression: UPDATE expression
            expression_attribute_values: Values for update expression
            expression_attribute_names: Names for update expression
            condition_expression: Optional condition for update
            return_values: What to return after update

        Returns:
            Returned attributes if return_values != 'NONE' (None when the
            response carries no attributes)
        """
        try:
            update_kwargs = {
                'Key': key,
                'UpdateExpression': update_expression,
                'ReturnValues': return_values
            }

            if expression_attribute_values:
                update_kwargs['ExpressionAttributeValues'] = expression_attribute_values
            if expression_attribute_names:
                update_kwargs['ExpressionAttributeNames'] = expression_attribute_names
            if condition_expression is not None:
                update_kwargs['ConditionExpression'] = condition_expression

            response = self.table.update_item(**update_kwargs)
            logger.info(f"Updated item in {self.table_name}: {key}")

            return response.get('Attributes') if return_values != 'NONE' else None

        except ClientError as e:
            raise map_dynamodb_error(e, "UpdateItem", self.table_name, _resource_id(key)) from e

    def delete_item(
        self,
        key: Dict[str, Any],
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Delete item from DynamoDB table.

        Args:
            key: Primary key of item to delete
            condition_expression: Optional condition for delete
            return_values: What to return after delete

        Returns:
            Deleted attributes if return_values != 'NONE' (None when nothing
            was deleted)
        """
        try:
            delete_kwargs = {
                'Key': key,
                'ReturnValues': return_values
            }

            if condition_expression is not None:
                delete_kwargs['ConditionExpression'] = condition_expression

            response = self.table.delete_item(**delete_kwargs)
            logger.info(f"Deleted item from {self.table_name}: {key}")

            return response.get('Attributes') if return_values != 'NONE' else None

        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, _resource_id(key)) from e


def create_table_gateway(config: DynamoDBConfig, table_name: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: DynamoDB configuration
        table_name: Base table name (defaults to config.table_name); prefixed via config.get_table_name()

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name)
