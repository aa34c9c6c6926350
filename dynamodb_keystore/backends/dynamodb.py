"""
DynamoDB Storage Backend

Stores every keyspace in one table whose primary key is
(keyspace attribute = partition key, key attribute = sort key):

    {<keyspace>: 'users', <key>: 'alice', <value>: '...', <version>: 99162322}

Predicates become ConditionExpressions:

- ITEM_ABSENT    -> attribute_not_exists(<key>)
- ITEM_PRESENT   -> attribute_exists(<key>)
- VERSION_EQUALS -> <version> = :v

Attribute names always travel as ExpressionAttributeNames placeholders because
``key`` and ``value`` are DynamoDB reserved words.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr

from ..core import TableGateway
from ..models import (
    AttributeNames,
    AttributeRole,
    Predicate,
    PredicateKind,
    ReadConsistency,
    StoredItem,
)

logger = logging.getLogger(__name__)


class DynamoDBBackend:
    """StorageBackend over a single DynamoDB table."""

    def __init__(self, gateway: TableGateway, attribute_names: Optional[AttributeNames] = None):
        """Initialize the backend.

        Args:
            gateway: Gateway for the keystore table
            attribute_names: Physical attribute names (defaults: keyspace/key/value/version)
        """
        self.gateway = gateway
        self.attribute_names = attribute_names or AttributeNames()

    @property
    def table_name(self) -> str:
        return self.gateway.table_name

    def _primary_key(self, partition: str, key: str) -> Dict[str, Any]:
        return {
            self.attribute_names.keyspace: partition,
            self.attribute_names.key: key,
        }

    def _condition(self, predicate: Predicate):
        """Build the boto3 condition for a predicate (None when unconditional)."""
        if not predicate.is_conditional:
            return None
        if predicate.kind is PredicateKind.ITEM_ABSENT:
            return Attr(self.attribute_names.key).not_exists()
        if predicate.kind is PredicateKind.ITEM_PRESENT:
            return Attr(self.attribute_names.key).exists()
        return Attr(self.attribute_names.version).eq(predicate.version)

    def _to_stored_item(self, item: Optional[Dict[str, Any]], key: str) -> Optional[StoredItem]:
        """Convert a raw DynamoDB item to a StoredItem (Decimal versions become int)."""
        if not item:
            return None
        version = item.get(self.attribute_names.version)
        if isinstance(version, Decimal):
            version = int(version)
        return StoredItem(
            key=item.get(self.attribute_names.key, key),
            value=item.get(self.attribute_names.value),
            version=version,
        )

    def put_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
    ) -> None:
        """
        Write the whole item.

        DynamoDB Operation: PutItem, with ConditionExpression when predicate is set
        """
        item = self._primary_key(partition, key)
        item[self.attribute_names.value] = value
        item[self.attribute_names.version] = version

        self.gateway.put_item(
            item,
            key_attributes=[self.attribute_names.keyspace, self.attribute_names.key],
            condition_expression=self._condition(predicate),
        )

    def update_item(
        self,
        partition: str,
        key: str,
        value: str,
        version: int,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = False,
    ) -> Optional[StoredItem]:
        """
        Set value and version on the item.

        DynamoDB Operation: UpdateItem SET #value = :value, #version = :version
        ReturnValues: ALL_OLD when return_prior, otherwise NONE
        """
        attributes = self.gateway.update_item(
            key=self._primary_key(partition, key),
            update_expression="SET #value = :value, #version = :version",
            expression_attribute_values={':value': value, ':version': version},
            expression_attribute_names={
                '#value': self.attribute_names.value,
                '#version': self.attribute_names.version,
            },
            condition_expression=self._condition(predicate),
            return_values='ALL_OLD' if return_prior else 'NONE',
        )
        return self._to_stored_item(attributes, key)

    def delete_item(
        self,
        partition: str,
        key: str,
        predicate: Predicate = Predicate.none(),
        return_prior: bool = True,
    ) -> Optional[StoredItem]:
        """
        Delete the item.

        DynamoDB Operation: DeleteItem, ReturnValues ALL_OLD when return_prior
        """
        attributes = self.gateway.delete_item(
            key=self._primary_key(partition, key),
            condition_expression=self._condition(predicate),
            return_values='ALL_OLD' if return_prior else 'NONE',
        )
        return self._to_stored_item(attributes, key)

    def get_item(
        self,
        partition: str,
        key: str,
        consistency: ReadConsistency = ReadConsistency.STRONG,
        projection: Optional[List[AttributeRole]] = None,
    ) -> Optional[StoredItem]:
        """
        Read the item.

        DynamoDB Operation: GetItem with ConsistentRead and optional ProjectionExpression
        """
        projection_expression = None
        expression_attribute_names = None
        if projection:
            expression_attribute_names = {
                f"#p{i}": self.attribute_names.for_role(role) for i, role in enumerate(projection)
            }
            projection_expression = ", ".join(expression_attribute_names)

        item = self.gateway.get_item(
            key=self._primary_key(partition, key),
            consistent_read=ReadConsistency(consistency) is ReadConsistency.STRONG,
            projection_expression=projection_expression,
            expression_attribute_names=expression_attribute_names,
        )
        return self._to_stored_item(item, key)
