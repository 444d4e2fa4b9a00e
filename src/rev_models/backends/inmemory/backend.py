"""
In-memory backend.

Stores records as plain dicts per model name. Intended for tests,
prototyping and singleton/settings models that don't need persistence.

Methods never await between reading and writing storage, so concurrent
operations can't interleave inside a single create/update/remove; in
particular auto-number values are unique even under concurrent creates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.backends.base import Backend
from rev_models.backends.inmemory.query import InMemoryQuery
from rev_models.errors import BackendError
from rev_models.fields.field import Field, FieldKind
from rev_models.operations.options import (
    CreateOptions,
    ExecOptions,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
)
from rev_models.queries.parser import QueryParser

if TYPE_CHECKING:
    from rev_models.models.meta import ModelMeta
    from rev_models.models.model import Model
    from rev_models.operations.result import ModelOperationResult
    from rev_models.registry import ModelRegistry

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class InMemoryBackend(Backend):
    """Backend that keeps records in process memory."""

    def __init__(self) -> None:
        self._storage: dict[str, list[Record]] = {}
        self._sequences: dict[str, dict[str, int]] = {}

    # =========================================================================
    # Storage helpers
    # =========================================================================

    def _get_model_data(self, meta: ModelMeta) -> list[Record]:
        return self._storage.setdefault(meta.name or "", [])

    def _get_next_sequence(self, meta: ModelMeta, field: Field) -> int:
        sequences = self._sequences.setdefault(meta.name or "", {})
        value = sequences.get(field.name, 1)
        sequences[field.name] = value + 1
        return value

    def _write_fields(
        self,
        operation: str,
        meta: ModelMeta,
        source: Model | Record,
        target: Record,
        fields: list[str] | None = None,
    ) -> None:
        """Copy field values from a model (or record dict) onto a stored record."""
        for field in meta.fields:
            if fields is not None and field.name not in fields:
                continue
            match field.kind:
                case FieldKind.AUTO_NUMBER:
                    if operation == "create":
                        target[field.name] = self._get_next_sequence(meta, field)
                case (
                    FieldKind.FIELD
                    | FieldKind.TEXT
                    | FieldKind.EMAIL
                    | FieldKind.URL
                    | FieldKind.PASSWORD
                    | FieldKind.NUMBER
                    | FieldKind.INTEGER
                    | FieldKind.BOOLEAN
                    | FieldKind.SELECTION
                    | FieldKind.DATE
                    | FieldKind.TIME
                    | FieldKind.DATETIME
                    | FieldKind.RECORD
                    | FieldKind.RECORD_LIST
                ):
                    if isinstance(source, dict):
                        if field.name in source:
                            target[field.name] = source[field.name]
                    elif hasattr(source, field.name):
                        target[field.name] = getattr(source, field.name)

    def _to_model(self, meta: ModelMeta, record: Record) -> Model:
        assert meta.ctor is not None
        return meta.ctor(dict(record))

    def _parse_where(self, registry: ModelRegistry, meta: ModelMeta, where: dict[str, Any]) -> InMemoryQuery:
        parser = QueryParser(registry)
        return InMemoryQuery(parser.get_query_node_for_query(meta, where))

    # =========================================================================
    # Backend interface
    # =========================================================================

    async def load(
        self,
        registry: ModelRegistry,
        model: type[Model],
        data: list[Record],
        result: ModelOperationResult[Any],
    ) -> ModelOperationResult[Any]:
        """
        Bulk-load records for a model.

        Records are stored as if created, so auto-number fields receive
        fresh sequence values.

        Raises:
            BackendError: If data is not a list of dicts
        """
        meta = registry.get_model_meta(model)
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise BackendError("InMemoryBackend.load() - data must be an array of objects")
        model_data = self._get_model_data(meta)
        for source in data:
            record: Record = {}
            self._write_fields("create", meta, source, record)
            model_data.append(record)
        result.set_meta(total_count=len(data))
        logger.debug("Loaded %d %s record(s)", len(data), meta.name)
        return result

    async def create(
        self,
        registry: ModelRegistry,
        model: Model,
        result: ModelOperationResult[Any],
        options: CreateOptions | Mapping[str, Any] | None = None,
    ) -> ModelOperationResult[Any]:
        meta = registry.get_model_meta(model)
        record: Record = {}
        self._write_fields("create", meta, model, record)
        self._get_model_data(meta).append(record)
        logger.debug("Created %s record %s", meta.name, record)
        result.result = self._to_model(meta, record)
        return result

    async def update(
        self,
        registry: ModelRegistry,
        model: Model,
        where: dict[str, Any] | None,
        result: ModelOperationResult[Any],
        options: UpdateOptions | Mapping[str, Any] | None = None,
    ) -> ModelOperationResult[Any]:
        if where is None:
            raise BackendError("InMemoryBackend.update() requires the 'where' parameter")
        meta = registry.get_model_meta(model)
        query = self._parse_where(registry, meta, where)
        fields = UpdateOptions.coerce(options).fields

        count = 0
        for record in self._get_model_data(meta):
            if query.test_record(record):
                self._write_fields("update", meta, model, record, fields)
                count += 1
        result.set_meta(total_count=count)
        logger.debug("Updated %d %s record(s)", count, meta.name)
        return result

    async def remove(
        self,
        registry: ModelRegistry,
        model: Model,
        where: dict[str, Any] | None,
        result: ModelOperationResult[Any],
        options: RemoveOptions | Mapping[str, Any] | None = None,
    ) -> ModelOperationResult[Any]:
        if where is None:
            raise BackendError("InMemoryBackend.remove() requires the 'where' parameter")
        meta = registry.get_model_meta(model)
        query = self._parse_where(registry, meta, where)

        kept: list[Record] = []
        removed = 0
        for record in self._get_model_data(meta):
            if query.test_record(record):
                removed += 1
            else:
                kept.append(record)
        self._storage[meta.name or ""] = kept
        result.set_meta(total_count=removed)
        logger.debug("Removed %d %s record(s)", removed, meta.name)
        return result

    async def read(
        self,
        registry: ModelRegistry,
        model: type[Model],
        where: dict[str, Any] | None,
        result: ModelOperationResult[Any],
        options: ReadOptions | Mapping[str, Any] | None = None,
    ) -> ModelOperationResult[Any]:
        if where is None:
            raise BackendError("InMemoryBackend.read() requires the 'where' parameter")
        options = ReadOptions.coerce(options)
        if options.limit < 1:
            raise BackendError("InMemoryBackend.read() - options.limit cannot be less than 1")
        if options.offset < 0:
            raise BackendError("InMemoryBackend.read() - options.offset cannot be less than zero")
        meta = registry.get_model_meta(model)
        query = self._parse_where(registry, meta, where)

        matches = [r for r in self._get_model_data(meta) if query.test_record(r)]
        if options.order_by:
            matches = self._sort(matches, options.order_by)

        result.set_meta(offset=options.offset, limit=options.limit, total_count=len(matches))
        page = matches[options.offset : options.offset + options.limit]
        result.results = [self._to_model(meta, r) for r in page]
        return result

    async def exec(
        self,
        registry: ModelRegistry,
        model: Model,
        method: str,
        arg_obj: dict[str, Any],
        result: ModelOperationResult[Any],
        options: ExecOptions | Mapping[str, Any] | None = None,
    ) -> ModelOperationResult[Any]:
        raise BackendError(
            f"InMemoryBackend.exec() - backend method '{method}' is not supported "
            "by the in-memory backend"
        )

    @staticmethod
    def _sort(records: list[Record], order_by: list[str]) -> list[Record]:
        """Stable multi-key sort. None sorts before any value."""
        ordered = list(records)
        for entry in reversed(order_by):
            parts = entry.split()
            field_name = parts[0]
            descending = len(parts) > 1 and parts[1] == "desc"

            def sort_key(record: Record, name: str = field_name) -> tuple[int, Any]:
                value = record.get(name)
                return (0, 0) if value is None else (1, value)

            ordered.sort(key=sort_key, reverse=descending)
        return ordered

    def get_records(self, model_name: str) -> list[Record]:
        """Return copies of the stored records for a model (for inspection in tests)."""
        return [dict(r) for r in self._storage.get(model_name, [])]
