import os
from datetime import datetime, timedelta, timezone

import boto3
import pytest

from app.database.dynamodb import create_table_if_not_exists, delete_table
from app.database.memory import InMemoryCounter, InMemoryMap
from app.schemas.event import EventPayload
from app.services.event_service import EventService
from app.services.event_store import EventStore
from app.services.id_allocator import IdAllocator

TEST_TABLE_NAME = "EventRegistry_Test"


class FakeClock:
    """Deterministic clock advancing one minute per reading"""

    def __init__(self):
        self.now = datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryMap()


@pytest.fixture
def counter():
    return InMemoryCounter()


@pytest.fixture
def event_service(storage, counter, clock):
    """EventService backed by in-memory storage"""
    return EventService(EventStore(storage), IdAllocator(counter), clock=clock)


@pytest.fixture
def payload():
    return EventPayload(
        event_title="Meetup",
        event_description="Monthly community meetup",
        event_location="Tech Hub",
        event_card_imgurl="https://example.com/meetup.png",
    )


@pytest.fixture(scope="session")
def dynamodb_table():
    """Create test DynamoDB table for the session, if DynamoDB Local is configured"""
    endpoint = os.getenv("DYNAMODB_ENDPOINT")
    if not endpoint:
        pytest.skip("DYNAMODB_ENDPOINT not set, skipping DynamoDB Local tests")

    resource = boto3.resource(
        "dynamodb",
        endpoint_url=endpoint,
        region_name=os.getenv("AWS_DEFAULT_REGION", "us-east-1"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "fake"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "fake"),
    )
    table = create_table_if_not_exists(resource, TEST_TABLE_NAME)

    yield table

    delete_table(resource, TEST_TABLE_NAME)


@pytest.fixture
def dynamodb_resource(dynamodb_table):
    """Get DynamoDB resource for tests, with an emptied test table"""
    resource = boto3.resource(
        "dynamodb",
        endpoint_url=os.getenv("DYNAMODB_ENDPOINT"),
        region_name=os.getenv("AWS_DEFAULT_REGION", "us-east-1"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "fake"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "fake"),
    )

    table = resource.Table(TEST_TABLE_NAME)
    for item in table.scan().get("Items", []):
        table.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})

    return resource
