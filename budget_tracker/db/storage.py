"""
Persistence collaborators for the transaction store.

Both backends follow a key-value contract: the complete collection is read
once at startup and written back whole after every mutation, so the last
write always holds the full current snapshot.
"""
from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from budget_tracker.core.config import Settings
from budget_tracker.core.errors import ConfigurationError, PersistenceError
from budget_tracker.models.transaction import Transaction


class TransactionRepository(ABC):
    """Load/save contract. Implementations raise PersistenceError on failure."""

    @abstractmethod
    def load(self) -> List[Transaction]:
        raise NotImplementedError

    @abstractmethod
    def save(self, transactions: Sequence[Transaction]) -> None:
        raise NotImplementedError

    def describe(self) -> dict:
        return {"backend": type(self).__name__}


def _serialize(transactions: Sequence[Transaction]) -> List[dict]:
    return [tx.model_dump(mode="json") for tx in transactions]


def _deserialize(items: Any) -> List[Transaction]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise PersistenceError("Stored transactions are not a list")
    try:
        return [Transaction.model_validate(item) for item in items]
    except ValidationError as e:
        raise PersistenceError(f"Stored transaction is malformed: {e}") from e


class JsonFileRepository(TransactionRepository):
    """Stores the collection under a single key in a local JSON document."""

    def __init__(self, path: str | Path, key: str = "financeTransactions") -> None:
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as fp:
                document = json.load(fp)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise PersistenceError(f"{self.path} does not hold a key-value document")
        return document

    def load(self) -> List[Transaction]:
        return _deserialize(self._read_document().get(self.key))

    def save(self, transactions: Sequence[Transaction]) -> None:
        document = self._read_document()
        document[self.key] = _serialize(transactions)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(document, fp, indent=2)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Could not write {self.path}: {e}") from e

    def describe(self) -> dict:
        return {"backend": "json", "path": str(self.path), "key": self.key}


class DynamoRepository(TransactionRepository):
    """Stores the whole collection as one DynamoDB item keyed by `storage_key`."""

    def __init__(self, table: Any, key: str = "financeTransactions") -> None:
        self.table = table
        self.key = key

    def load(self) -> List[Transaction]:
        try:
            response = self.table.get_item(Key={"storage_key": self.key})
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(f"DynamoDB load failed: {_error_message(e)}") from e
        item = response.get("Item")
        if not item:
            return []
        return _deserialize(_from_dynamo(item.get("transactions")))

    def save(self, transactions: Sequence[Transaction]) -> None:
        item = {
            "storage_key": self.key,
            "transactions": _serialize(transactions),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.table.put_item(Item=_convert_for_dynamo(item))
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(f"DynamoDB save failed: {_error_message(e)}") from e

    def describe(self) -> dict:
        return {"backend": "dynamo", "table": getattr(self.table, "name", None), "key": self.key}


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Message", str(error))
    return str(error)


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj


def _from_dynamo(obj: Any):
    """
    Recursively convert Decimal instances back to native Python numeric types.
    """
    if isinstance(obj, list):
        return [_from_dynamo(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    return obj


def get_repository(settings: Settings) -> TransactionRepository:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "json":
        return JsonFileRepository(settings.STORAGE_PATH, settings.STORAGE_KEY)
    if backend == "dynamo":
        dynamodb = boto3.resource("dynamodb", region_name=settings.DYNAMO_REGION)
        return DynamoRepository(dynamodb.Table(settings.DYNAMO_TRANSACTIONS_TABLE), settings.STORAGE_KEY)
    raise ConfigurationError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
