import logging
import time
from decimal import Decimal
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from app.config import Settings, get_settings
from .storage import DurableCounter, DurableMap, StorageError

logger = logging.getLogger(__name__)


def get_db_connection(settings: Optional[Settings] = None):
    settings = settings or get_settings()
    try:
        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=settings.dynamodb_endpoint_url,
            region_name=settings.region_name,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
        return dynamodb
    except NoCredentialsError:
        logger.error("Credentials not available.")
        return None


def create_table_if_not_exists(dynamodb, table_name="EventRegistry"):
    """Create the single-table layout used for events and the id counter"""
    try:
        table = dynamodb.Table(table_name)
        table.table_status
        logger.info(f"Table {table_name} already exists")
        return table
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise

    table = dynamodb.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )

    logger.info(f"Creating table {table_name}...")
    table.wait_until_exists()

    while True:
        table.reload()
        if table.table_status == "ACTIVE":
            break
        time.sleep(1)

    logger.info(f"Table {table_name} created successfully")
    return table


def delete_table(dynamodb, table_name="EventRegistry"):
    """Delete DynamoDB table"""
    try:
        table = dynamodb.Table(table_name)
        table.delete()
        table.wait_until_not_exists()
        logger.info(f"Table {table_name} deleted successfully")
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise
        logger.info(f"Table {table_name} does not exist")


def _from_dynamodb(value):
    # The resource layer returns every number as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, list):
        return [_from_dynamodb(v) for v in value]
    if isinstance(value, dict):
        return {k: _from_dynamodb(v) for k, v in value.items()}
    return value


class DynamoDBMap(DurableMap):
    """Records stored as items keyed by PK=<prefix>#<key>, SK=DETAIL."""

    def __init__(self, dynamodb_resource, table_name="EventRegistry", prefix="EVENT"):
        self.dynamodb = dynamodb_resource
        self.table = dynamodb_resource.Table(table_name)
        self.prefix = prefix

    def _key(self, key: int) -> Dict[str, str]:
        return {"PK": f"{self.prefix}#{key}", "SK": "DETAIL"}

    def _clean_dynamodb_fields(self, item: Optional[Dict]) -> Optional[Dict[str, Any]]:
        if not item:
            return None
        cleaned = {k: v for k, v in item.items() if k not in ("PK", "SK")}
        return _from_dynamodb(cleaned)

    def get(self, key: int) -> Optional[Dict[str, Any]]:
        try:
            response = self.table.get_item(Key=self._key(key), ConsistentRead=True)
        except ClientError as e:
            raise StorageError(f"Failed to get item {self.prefix}#{key}: {e}") from e
        return self._clean_dynamodb_fields(response.get("Item"))

    def insert(self, key: int, value: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        item = {**value, **self._key(key)}
        try:
            response = self.table.put_item(Item=item, ReturnValues="ALL_OLD")
        except ClientError as e:
            raise StorageError(f"Failed to put item {self.prefix}#{key}: {e}") from e
        return self._clean_dynamodb_fields(response.get("Attributes"))

    def remove(self, key: int) -> Optional[Dict[str, Any]]:
        try:
            response = self.table.delete_item(
                Key=self._key(key), ReturnValues="ALL_OLD"
            )
        except ClientError as e:
            raise StorageError(f"Failed to delete item {self.prefix}#{key}: {e}") from e
        return self._clean_dynamodb_fields(response.get("Attributes"))


class DynamoDBCounter(DurableCounter):
    """Counter item at PK=COUNTER#<name>, SK=COUNTER, updated with atomic ADD."""

    def __init__(self, dynamodb_resource, table_name="EventRegistry", name="event_id"):
        self.dynamodb = dynamodb_resource
        self.table = dynamodb_resource.Table(table_name)
        self.key = {"PK": f"COUNTER#{name}", "SK": "COUNTER"}

    def get(self) -> int:
        try:
            response = self.table.get_item(Key=self.key, ConsistentRead=True)
        except ClientError as e:
            raise StorageError(f"Failed to read counter {self.key['PK']}: {e}") from e
        item = response.get("Item")
        if not item:
            return 0
        return int(item["value"])

    def increment(self) -> int:
        try:
            response = self.table.update_item(
                Key=self.key,
                UpdateExpression="ADD #value :inc",
                ExpressionAttributeNames={"#value": "value"},
                ExpressionAttributeValues={":inc": 1},
                ReturnValues="UPDATED_NEW",
            )
        except ClientError as e:
            raise StorageError(
                f"Failed to increment counter {self.key['PK']}: {e}"
            ) from e
        return int(response["Attributes"]["value"])
