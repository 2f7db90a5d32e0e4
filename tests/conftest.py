import copy
import datetime
import re

import pytest
from botocore.exceptions import ClientError

from smart_cooking.database import CacheService, DynamoDBHelper
from smart_cooking.ingredients import IngredientNormalizer


def client_error(code, operation="GetItem"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeTable:
    """In-memory stand-in for the subset of boto3's Table API we use."""

    def __init__(self):
        self.items = {}

    @staticmethod
    def _key(key):
        return (key["PK"], key["SK"])

    def get_item(self, Key):
        item = self.items.get(self._key(Key))
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put_item(self, Item):
        self.items[self._key(Item)] = copy.deepcopy(Item)
        return {}

    def delete_item(self, Key):
        self.items.pop(self._key(Key), None)
        return {}

    def update_item(
        self,
        Key,
        UpdateExpression,
        ExpressionAttributeValues,
        ReturnValues=None,
        ExpressionAttributeNames=None,
        ConditionExpression=None,
    ):
        key = self._key(Key)
        if ConditionExpression == "attribute_exists(PK)" and key not in self.items:
            raise client_error("ConditionalCheckFailedException", "UpdateItem")

        item = self.items.setdefault(key, dict(Key))
        names = ExpressionAttributeNames or {}
        clauses = re.findall(
            r"(ADD|SET)\s+(.*?)(?=\s+(?:ADD|SET)\s+|$)", UpdateExpression
        )
        for action, body in clauses:
            for assignment in body.split(","):
                if action == "ADD":
                    attr, placeholder = assignment.split()
                    attr = names.get(attr, attr)
                    value = ExpressionAttributeValues[placeholder]
                    item[attr] = item.get(attr, 0) + value
                else:
                    attr, placeholder = [p.strip() for p in assignment.split("=")]
                    attr = names.get(attr, attr)
                    item[attr] = ExpressionAttributeValues[placeholder]
        return {"Attributes": copy.deepcopy(item)}

    def query(self, KeyConditionExpression, IndexName=None, Limit=None, **kwargs):
        expression = KeyConditionExpression.get_expression()
        key_attr, value = expression["values"]
        matches = [
            copy.deepcopy(item)
            for item in self.items.values()
            if item.get(key_attr.name) == value
        ]
        if IndexName == "GSI2":
            matches.sort(key=lambda item: item.get("GSI2SK", ""))
        if Limit is not None:
            matches = matches[:Limit]
        return {"Items": matches, "Count": len(matches)}


class FrozenClock:
    def __init__(self, now=None):
        self.now = now or datetime.datetime(
            2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc
        )

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += datetime.timedelta(seconds=seconds)


@pytest.fixture
def fake_table():
    return FakeTable()


@pytest.fixture
def store(fake_table):
    return DynamoDBHelper(fake_table, max_retries=3, retry_delay=0)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def normalizer(store, clock):
    return IngredientNormalizer(store, clock=clock)


@pytest.fixture
def cache(store, clock):
    return CacheService(store, clock=clock)
