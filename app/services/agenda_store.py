from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

from app.services.agenda_models import ParsedEvent


class AgendaStore(ABC):
    @abstractmethod
    def save_item(self, record: Mapping[str, Any]) -> str:
        raise NotImplementedError

    @abstractmethod
    def save_execution(self, record: Mapping[str, Any]) -> str:
        raise NotImplementedError

    @abstractmethod
    def list_items(self, owner_id: str | None) -> list[dict[str, Any]]:
        raise NotImplementedError


class InMemoryAgendaStore(AgendaStore):
    def __init__(self) -> None:
        self._items: list[dict[str, Any]] = []
        self._executions: list[dict[str, Any]] = []

    def save_item(self, record: Mapping[str, Any]) -> str:
        record_id = f"memory-agenda-item-{len(self._items) + 1}"
        stored_record = dict(record)
        stored_record["_id"] = record_id
        self._items.append(stored_record)
        return record_id

    def save_execution(self, record: Mapping[str, Any]) -> str:
        record_id = f"memory-agenda-execution-{len(self._executions) + 1}"
        stored_record = dict(record)
        stored_record["_id"] = record_id
        self._executions.append(stored_record)
        return record_id

    def list_items(self, owner_id: str | None) -> list[dict[str, Any]]:
        return [dict(record) for record in self._items if record.get("owner_id") == owner_id]

    def list_executions(self, item_id: str) -> list[dict[str, Any]]:
        return [
            dict(record) for record in self._executions if record.get("agenda_item_id") == item_id
        ]


class MongoAgendaStore(AgendaStore):
    def __init__(
        self,
        *,
        uri: str,
        db_name: str,
        items_collection_name: str,
        executions_collection_name: str,
        connect_timeout_ms: int = 2000,
    ) -> None:
        from pymongo import ASCENDING, MongoClient

        self._client = MongoClient(
            uri,
            serverSelectionTimeoutMS=connect_timeout_ms,
            connectTimeoutMS=connect_timeout_ms,
        )
        database = self._client[db_name]
        self._items = database[items_collection_name]
        self._executions = database[executions_collection_name]
        self._items.create_index([("owner_id", ASCENDING), ("date", ASCENDING)])
        self._executions.create_index([("agenda_item_id", ASCENDING), ("date", ASCENDING)])

    def save_item(self, record: Mapping[str, Any]) -> str:
        insert_result = self._items.insert_one(dict(record))
        return str(insert_result.inserted_id)

    def save_execution(self, record: Mapping[str, Any]) -> str:
        insert_result = self._executions.insert_one(dict(record))
        return str(insert_result.inserted_id)

    def list_items(self, owner_id: str | None) -> list[dict[str, Any]]:
        return list(self._items.find({"owner_id": owner_id}))


def create_agenda_store(
    store_name: str,
    mongodb_uri: str,
    mongodb_db_name: str,
    mongodb_items_collection_name: str,
    mongodb_executions_collection_name: str,
    mongodb_connect_timeout_ms: int,
) -> AgendaStore:
    return _create_agenda_store_cached(
        store_name=store_name,
        mongodb_uri=mongodb_uri,
        mongodb_db_name=mongodb_db_name,
        mongodb_items_collection_name=mongodb_items_collection_name,
        mongodb_executions_collection_name=mongodb_executions_collection_name,
        mongodb_connect_timeout_ms=mongodb_connect_timeout_ms,
    )


@lru_cache
def _create_agenda_store_cached(
    store_name: str,
    mongodb_uri: str,
    mongodb_db_name: str,
    mongodb_items_collection_name: str,
    mongodb_executions_collection_name: str,
    mongodb_connect_timeout_ms: int,
) -> AgendaStore:
    if store_name == "memory":
        return InMemoryAgendaStore()

    if store_name == "mongodb":
        return MongoAgendaStore(
            uri=mongodb_uri,
            db_name=mongodb_db_name,
            items_collection_name=mongodb_items_collection_name,
            executions_collection_name=mongodb_executions_collection_name,
            connect_timeout_ms=mongodb_connect_timeout_ms,
        )

    # Unknown store names keep the service usable without persistence.
    return InMemoryAgendaStore()


def clear_agenda_store_cache() -> None:
    _create_agenda_store_cached.cache_clear()


def build_agenda_item_record(
    event: ParsedEvent,
    *,
    owner_id: str | None,
    notify_minutes_before: int,
) -> dict[str, Any]:
    return {
        "owner_id": owner_id,
        "title": event.title,
        "kind": event.kind.value,
        "date": None if event.recurring else event.date,
        "start_time": event.start_time,
        "end_time": event.end_time,
        "recurring": event.recurring,
        "origin": event.origin.value,
        "weekdays": [day.value for day in event.weekdays] if event.recurring else [],
        "category": event.category.value,
        "active": True,
        "notify_minutes_before": notify_minutes_before,
        "created_at": datetime.now(UTC),
    }


def build_execution_record(
    *,
    agenda_item_id: str,
    event: ParsedEvent,
    owner_id: str | None,
) -> dict[str, Any]:
    return {
        "agenda_item_id": agenda_item_id,
        "owner_id": owner_id,
        "date": event.date,
        "scheduled_time": event.start_time,
        "status": "pending",
        "created_at": datetime.now(UTC),
    }
