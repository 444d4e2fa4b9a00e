"""
Tests for InMemoryBackend.
"""

from __future__ import annotations

import asyncio

import pytest

from rev_models.backends import Backend, InMemoryBackend
from rev_models.errors import BackendError, QueryError
from rev_models.fields import AutoNumberField, IntegerField, TextField
from rev_models.models import Model
from rev_models.operations import (
    ModelOperation,
    ModelOperationResult,
    ReadOptions,
    UpdateOptions,
)
from rev_models.registry import ModelRegistry


class Task(Model):
    __meta__ = {
        "fields": [
            AutoNumberField("id", {"primary_key": True}),
            TextField("title"),
            IntegerField("points", {"required": False}),
        ]
    }


class Note(Model):
    __meta__ = {"fields": [TextField("text")]}


TASKS = [
    {"title": "Write docs", "points": 3},
    {"title": "Fix bug", "points": 5},
    {"title": "Review", "points": 1},
    {"title": "Plan", "points": None},
]


@pytest.fixture
def tasks_registry(registry: ModelRegistry) -> ModelRegistry:
    registry.register(Task)
    registry.register(Note)
    return registry


def new_result(operation: str) -> ModelOperationResult:
    return ModelOperationResult(ModelOperation(operation))


async def load_tasks(backend: InMemoryBackend, registry: ModelRegistry) -> None:
    await backend.load(registry, Task, [dict(t) for t in TASKS], new_result("create"))


async def read_titles(
    backend: InMemoryBackend, registry: ModelRegistry, where: dict, **options: object
) -> list[str]:
    result = await backend.read(
        registry, Task, where, new_result("read"), ReadOptions.coerce(options)
    )
    return [t.title for t in result.results or []]


# =============================================================================
# load / create
# =============================================================================


class TestLoadAndCreate:
    """Tests for load() and create()."""

    def test_is_a_backend(self) -> None:
        """Test InMemoryBackend implements the Backend interface."""
        assert isinstance(InMemoryBackend(), Backend)

    @pytest.mark.asyncio
    async def test_load_assigns_auto_numbers(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test loaded records get sequential ids."""
        result = new_result("create")
        await backend.load(tasks_registry, Task, [dict(t) for t in TASKS], result)
        records = backend.get_records("Task")
        assert [r["id"] for r in records] == [1, 2, 3, 4]
        assert records[0] == {"id": 1, "title": "Write docs", "points": 3}
        assert result.meta["total_count"] == 4

    @pytest.mark.asyncio
    async def test_load_ignores_unknown_keys(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test only declared fields are stored."""
        await backend.load(tasks_registry, Note, [{"text": "hi", "colour": "red"}], new_result("create"))
        assert backend.get_records("Note") == [{"text": "hi"}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", [{"text": "hi"}, ["hi"], None])
    async def test_load_requires_list_of_dicts(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry, data: object
    ) -> None:
        """Test load() rejects anything but a list of dicts."""
        with pytest.raises(BackendError, match="data must be an array of objects"):
            await backend.load(tasks_registry, Note, data, new_result("create"))  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_create_returns_stored_model(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test create() returns a new instance including the assigned id."""
        model = Task(title="New", points=2)
        result = await backend.create(tasks_registry, model, new_result("create"))
        assert isinstance(result.result, Task)
        assert result.result is not model
        assert result.result == Task(id=1, title="New", points=2)
        assert not hasattr(model, "id")

    @pytest.mark.asyncio
    async def test_create_ignores_supplied_auto_number(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test auto-number values always come from the sequence."""
        await load_tasks(backend, tasks_registry)
        result = await backend.create(tasks_registry, Task(id=99, title="X"), new_result("create"))
        assert result.result.id == 5  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_unique_ids(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test concurrent creates never share an auto-number."""
        results = await asyncio.gather(
            *(
                backend.create(tasks_registry, Task(title=f"t{i}"), new_result("create"))
                for i in range(20)
            )
        )
        ids = [r.result.id for r in results]  # type: ignore[union-attr]
        assert sorted(ids) == list(range(1, 21))

    @pytest.mark.asyncio
    async def test_sequences_are_per_backend(self, tasks_registry: ModelRegistry) -> None:
        """Test separate backends keep separate sequences."""
        first, second = InMemoryBackend(), InMemoryBackend()
        await first.create(tasks_registry, Task(title="a"), new_result("create"))
        result = await second.create(tasks_registry, Task(title="b"), new_result("create"))
        assert result.result.id == 1  # type: ignore[union-attr]


# =============================================================================
# read
# =============================================================================


class TestRead:
    """Tests for read()."""

    @pytest.mark.asyncio
    async def test_reads_all_in_insertion_order(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test an empty where returns everything."""
        await load_tasks(backend, tasks_registry)
        assert await read_titles(backend, tasks_registry, {}) == [
            "Write docs",
            "Fix bug",
            "Review",
            "Plan",
        ]

    @pytest.mark.asyncio
    async def test_returns_model_instances_and_meta(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test results are models and meta holds paging details."""
        await load_tasks(backend, tasks_registry)
        result = await backend.read(
            tasks_registry, Task, {"points": {"$gte": 3}}, new_result("read"), ReadOptions(limit=1)
        )
        assert result.results == [Task(id=1, title="Write docs", points=3)]
        assert result.meta == {"offset": 0, "limit": 1, "total_count": 2}

    @pytest.mark.asyncio
    async def test_offset_and_limit(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test offset skips records and limit caps the page."""
        await load_tasks(backend, tasks_registry)
        assert await read_titles(backend, tasks_registry, {}, offset=1, limit=2) == [
            "Fix bug",
            "Review",
        ]
        assert await read_titles(backend, tasks_registry, {}, offset=10) == []

    @pytest.mark.asyncio
    async def test_paging_by_id(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test offset/limit windows over five records."""
        data = [{"title": f"t{i}"} for i in range(5)]
        await backend.load(tasks_registry, Task, data, new_result("create"))

        async def ids(**options: object) -> list[int]:
            result = await backend.read(
                tasks_registry, Task, {}, new_result("read"), ReadOptions.coerce(options)
            )
            return [t.id for t in result.results or []]

        assert await ids(offset=2) == [3, 4, 5]
        assert await ids(offset=3, limit=1) == [4]
        assert await ids(offset=100, limit=40) == []

    @pytest.mark.asyncio
    async def test_like_keeps_storage_order(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test $like matches in the order records were stored."""
        data = [{"title": "John Doe"}, {"title": "Felix The Cat"}, {"title": "Jane Doe"}]
        await backend.load(tasks_registry, Task, data, new_result("create"))
        assert await read_titles(backend, tasks_registry, {"title": {"$like": "% Doe"}}) == [
            "John Doe",
            "Jane Doe",
        ]

    @pytest.mark.asyncio
    async def test_order_by(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test sorting ascending and descending, with None first when ascending."""
        await load_tasks(backend, tasks_registry)
        assert await read_titles(backend, tasks_registry, {}, order_by=["points"]) == [
            "Plan",
            "Review",
            "Write docs",
            "Fix bug",
        ]
        assert await read_titles(backend, tasks_registry, {}, order_by=["points desc"]) == [
            "Fix bug",
            "Write docs",
            "Review",
            "Plan",
        ]
        assert await read_titles(backend, tasks_registry, {}, order_by=["title asc"]) == [
            "Fix bug",
            "Plan",
            "Review",
            "Write docs",
        ]

    @pytest.mark.asyncio
    async def test_multi_key_order_is_stable(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test later keys break ties in earlier ones."""
        data = [
            {"title": "b", "points": 1},
            {"title": "a", "points": 2},
            {"title": "a", "points": 1},
        ]
        await backend.load(tasks_registry, Task, data, new_result("create"))
        result = await backend.read(
            tasks_registry,
            Task,
            {},
            new_result("read"),
            ReadOptions(order_by=["title", "points desc"]),
        )
        assert [(t.title, t.points) for t in result.results or []] == [
            ("a", 2),
            ("a", 1),
            ("b", 1),
        ]

    @pytest.mark.asyncio
    async def test_mapping_options(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test plain dict options are accepted, with defaults for missing keys."""
        await load_tasks(backend, tasks_registry)
        result = await backend.read(tasks_registry, Task, {}, new_result("read"), {"offset": 2})
        assert [t.title for t in result.results or []] == ["Review", "Plan"]
        assert result.meta == {"offset": 2, "limit": 20, "total_count": 4}

        result = await backend.read(tasks_registry, Task, {}, new_result("read"), {})
        assert len(result.results or []) == 4
        result = await backend.read(tasks_registry, Task, {}, new_result("read"))
        assert result.meta["limit"] == 20

    @pytest.mark.asyncio
    async def test_sort_direction_is_lowercase(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test only "desc" reverses the order."""
        await load_tasks(backend, tasks_registry)
        assert await read_titles(backend, tasks_registry, {}, order_by=["points DESC"]) == [
            "Plan",
            "Review",
            "Write docs",
            "Fix bug",
        ]

    @pytest.mark.asyncio
    async def test_read_of_empty_model(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test reading a model with no records returns an empty page."""
        result = await backend.read(tasks_registry, Note, {}, new_result("read"), ReadOptions())
        assert result.results == []
        assert result.meta["total_count"] == 0

    @pytest.mark.asyncio
    async def test_read_argument_errors(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test read() checks where, limit and offset."""
        with pytest.raises(BackendError, match="requires the 'where' parameter"):
            await backend.read(tasks_registry, Task, None, new_result("read"), ReadOptions())
        with pytest.raises(BackendError, match="limit cannot be less than 1"):
            await backend.read(tasks_registry, Task, {}, new_result("read"), ReadOptions(limit=0))
        with pytest.raises(BackendError, match="offset cannot be less than zero"):
            await backend.read(tasks_registry, Task, {}, new_result("read"), ReadOptions(offset=-1))

    @pytest.mark.asyncio
    async def test_invalid_where(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test malformed where clauses raise QueryError."""
        with pytest.raises(QueryError):
            await backend.read(tasks_registry, Task, {"owner": 1}, new_result("read"), ReadOptions())


# =============================================================================
# update / remove / exec
# =============================================================================


class TestUpdateRemoveExec:
    """Tests for update(), remove() and exec()."""

    @pytest.mark.asyncio
    async def test_update_matching_records(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test matching records get the model's values and keep their ids."""
        await load_tasks(backend, tasks_registry)
        result = await backend.update(
            tasks_registry,
            Task(title="Done", points=0),
            {"points": {"$gte": 3}},
            new_result("update"),
        )
        assert result.meta["total_count"] == 2
        records = backend.get_records("Task")
        assert records[0] == {"id": 1, "title": "Done", "points": 0}
        assert records[1] == {"id": 2, "title": "Done", "points": 0}
        assert records[2]["title"] == "Review"

    @pytest.mark.asyncio
    async def test_update_everything(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test an empty where updates every record."""
        await load_tasks(backend, tasks_registry)
        result = await backend.update(tasks_registry, Task(title="Same"), {}, new_result("update"))
        assert result.meta["total_count"] == 4
        records = backend.get_records("Task")
        assert {r["title"] for r in records} == {"Same"}
        assert [r["id"] for r in records] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_update_selected_fields(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test options.fields limits which values are written."""
        await load_tasks(backend, tasks_registry)
        await backend.update(
            tasks_registry,
            Task(title="Ignored", points=8),
            {"id": 1},
            new_result("update"),
            UpdateOptions(fields=["points"]),
        )
        assert backend.get_records("Task")[0] == {"id": 1, "title": "Write docs", "points": 8}

    @pytest.mark.asyncio
    async def test_update_with_mapping_options(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test plain dict options are accepted and never override auto-numbers."""
        await load_tasks(backend, tasks_registry)
        result = await backend.update(
            tasks_registry, Task(id=-10, title="Frank"), {}, new_result("update"), {}
        )
        assert result.meta["total_count"] == 4
        assert [r["id"] for r in backend.get_records("Task")] == [1, 2, 3, 4]

        await backend.update(
            tasks_registry,
            Task(title="Ignored", points=9),
            {"id": 2},
            new_result("update"),
            {"fields": ["points"]},
        )
        assert backend.get_records("Task")[1] == {"id": 2, "title": "Frank", "points": 9}

    @pytest.mark.asyncio
    async def test_create_and_remove_with_mapping_options(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test create() and remove() accept plain dict options."""
        await backend.create(tasks_registry, Task(title="New"), new_result("create"), {})
        result = await backend.remove(tasks_registry, Task(), {"id": 1}, new_result("remove"), {})
        assert result.meta["total_count"] == 1
        assert backend.get_records("Task") == []

    @pytest.mark.asyncio
    async def test_update_requires_where(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test update() needs a where clause."""
        with pytest.raises(BackendError, match="requires the 'where' parameter"):
            await backend.update(tasks_registry, Task(title="x"), None, new_result("update"))

    @pytest.mark.asyncio
    async def test_remove(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test matching records are removed and counted."""
        await load_tasks(backend, tasks_registry)
        result = await backend.remove(
            tasks_registry, Task(), {"points": {"$lt": 4}}, new_result("remove")
        )
        assert result.meta["total_count"] == 2
        assert [r["title"] for r in backend.get_records("Task")] == ["Fix bug", "Plan"]

    @pytest.mark.asyncio
    async def test_remove_nothing(self, backend: InMemoryBackend, tasks_registry: ModelRegistry) -> None:
        """Test removing with no matches leaves storage alone."""
        await load_tasks(backend, tasks_registry)
        result = await backend.remove(tasks_registry, Task(), {"id": 99}, new_result("remove"))
        assert result.meta["total_count"] == 0
        assert len(backend.get_records("Task")) == 4

    @pytest.mark.asyncio
    async def test_remove_requires_where(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test remove() needs a where clause."""
        with pytest.raises(BackendError, match="requires the 'where' parameter"):
            await backend.remove(tasks_registry, Task(), None, new_result("remove"))

    @pytest.mark.asyncio
    async def test_exec_is_not_supported(
        self, backend: InMemoryBackend, tasks_registry: ModelRegistry
    ) -> None:
        """Test exec() always raises."""
        with pytest.raises(BackendError, match="'archive' is not supported"):
            await backend.exec(tasks_registry, Task(), "archive", {}, new_result("exec"))

    def test_get_records_for_unknown_model(self, backend: InMemoryBackend) -> None:
        """Test unknown models have no records."""
        assert backend.get_records("Nothing") == []
