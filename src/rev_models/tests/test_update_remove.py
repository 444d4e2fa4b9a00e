"""
Tests for the update() and remove() operations.
"""

from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio

from rev_models.backends import InMemoryBackend
from rev_models.errors import ArgumentError, ConfigurationError, ModelError, ValidationError
from rev_models.fields import AutoNumberField, IntegerField, TextField
from rev_models.models import Model
from rev_models.operations import create, get_model_primary_key_query, remove, update
from rev_models.registry import ModelRegistry


class Member(Model):
    __meta__ = {
        "fields": [
            AutoNumberField("id", {"primary_key": True}),
            TextField("name"),
            IntegerField("level", {"required": False}),
        ]
    }


class LogLine(Model):
    __meta__ = {"fields": [TextField("text")]}


class SiteSettings(Model):
    __meta__ = {"fields": [TextField("title")], "singleton": True}


class Preview(Model):
    __meta__ = {
        "fields": [IntegerField("id", {"primary_key": True}), TextField("body")],
        "stored": False,
    }


@pytest_asyncio.fixture
async def members(registry: ModelRegistry) -> ModelRegistry:
    for model in (Member, LogLine, SiteSettings, Preview):
        registry.register(model)
    for name, level in [("Ann", 1), ("Bob", 2), ("Cat", 2)]:
        await create(registry, Member(name=name, level=level))
    return registry


class TestPrimaryKeyQuery:
    """Tests for get_model_primary_key_query()."""

    def test_builds_query(self, registry: ModelRegistry) -> None:
        """Test the where clause matches the primary key values."""
        meta = registry.register(Member)
        assert get_model_primary_key_query(Member(id=3, name="x"), meta) == {"id": 3}

    def test_composite_key(self, registry: ModelRegistry) -> None:
        """Test every primary key field is included."""

        class Pair(Model):
            pass

        meta = registry.register(
            Pair, {"fields": [TextField("a"), TextField("b")], "primary_key": ["a", "b"]}
        )
        assert get_model_primary_key_query(Pair(a="x", b="y"), meta) == {"a": "x", "b": "y"}

    def test_no_primary_key(self, registry: ModelRegistry) -> None:
        """Test models without a primary key can't build a query."""
        meta = registry.register(LogLine)
        with pytest.raises(ArgumentError, match="does not have a primary_key"):
            get_model_primary_key_query(LogLine(text="x"), meta)

    @pytest.mark.parametrize("value", [None, "unset"])
    def test_undefined_key_value(self, registry: ModelRegistry, value: Any) -> None:
        """Test primary key values must be set."""
        meta = registry.register(Member)
        model = Member(name="x") if value == "unset" else Member(id=None, name="x")
        with pytest.raises(ArgumentError, match="primary key field 'id' is undefined"):
            get_model_primary_key_query(model, meta)


# =============================================================================
# update
# =============================================================================


class TestUpdate:
    """Tests for update()."""

    @pytest.mark.asyncio
    async def test_updates_by_primary_key(self, members: ModelRegistry, backend: InMemoryBackend) -> None:
        """Test the record with the model's primary key is updated."""
        result = await update(members, Member(id=2, name="Robert", level=3))
        assert result.success is True
        assert result.meta["total_count"] == 1
        assert result.operation.where == {"id": 2}
        assert backend.get_records("Member")[1] == {"id": 2, "name": "Robert", "level": 3}

    @pytest.mark.asyncio
    async def test_updates_with_where(self, members: ModelRegistry, backend: InMemoryBackend) -> None:
        """Test an explicit where clause selects the records."""
        result = await update(
            members,
            Member(name="Promoted", level=5),
            {"where": {"level": 2}, "fields": ["level"]},
        )
        assert result.meta["total_count"] == 2
        assert [(r["name"], r["level"]) for r in backend.get_records("Member")] == [
            ("Ann", 1),
            ("Bob", 5),
            ("Cat", 5),
        ]

    @pytest.mark.asyncio
    async def test_empty_where_updates_all_and_keeps_ids(
        self, members: ModelRegistry, backend: InMemoryBackend
    ) -> None:
        """Test {} updates every record without touching auto-numbers."""
        result = await update(members, Member(name="Same", level=0), {"where": {}})
        assert result.meta["total_count"] == 3
        assert [r["id"] for r in backend.get_records("Member")] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_validates_first(self, members: ModelRegistry, backend: InMemoryBackend) -> None:
        """Test invalid models are not written."""
        with pytest.raises(ValidationError) as exc_info:
            await update(members, Member(id=1, name=""))
        assert "name" in exc_info.value.result.validation.field_errors  # type: ignore[union-attr]
        assert exc_info.value.result.operation.operation == "update"
        assert backend.get_records("Member")[0]["name"] == "Ann"

    @pytest.mark.asyncio
    async def test_singleton_updates_its_record(
        self, members: ModelRegistry, backend: InMemoryBackend
    ) -> None:
        """Test singletons update without a where clause or primary key."""
        await create(members, SiteSettings(title="Old"))
        result = await update(members, SiteSettings(title="New"))
        assert result.operation.where == {}
        assert backend.get_records("SiteSettings") == [{"title": "New"}]

    @pytest.mark.asyncio
    async def test_needs_where_without_primary_key(self, members: ModelRegistry) -> None:
        """Test models without a primary key need an explicit where clause."""
        with pytest.raises(ArgumentError, match="must be called with a where clause"):
            await update(members, LogLine(text="x"))

    @pytest.mark.asyncio
    async def test_needs_primary_key_value(self, members: ModelRegistry) -> None:
        """Test the primary key value must be set to derive the where clause."""
        with pytest.raises(ArgumentError, match="primary key field 'id' is undefined"):
            await update(members, Member(name="x"))

    @pytest.mark.asyncio
    async def test_not_stored(self, members: ModelRegistry) -> None:
        """Test models with stored: False can't be updated."""
        with pytest.raises(ConfigurationError, match=r"Cannot call update\(\)"):
            await update(members, Preview(id=1, body="x"))

    @pytest.mark.asyncio
    async def test_requires_model_instance(self, members: ModelRegistry) -> None:
        """Test update() needs a model instance."""
        with pytest.raises(ModelError, match="not a Model instance"):
            await update(members, Member)  # type: ignore[arg-type]


# =============================================================================
# remove
# =============================================================================


class TestRemove:
    """Tests for remove()."""

    @pytest.mark.asyncio
    async def test_removes_by_primary_key(self, members: ModelRegistry, backend: InMemoryBackend) -> None:
        """Test the record with the model's primary key is removed."""
        result = await remove(members, Member(id=1))
        assert result.meta["total_count"] == 1
        assert result.operation.where == {"id": 1}
        assert [r["name"] for r in backend.get_records("Member")] == ["Bob", "Cat"]

    @pytest.mark.asyncio
    async def test_removes_with_where(self, members: ModelRegistry, backend: InMemoryBackend) -> None:
        """Test an explicit where clause selects the records."""
        result = await remove(members, Member(), {"where": {"level": 2}})
        assert result.meta["total_count"] == 2
        assert [r["name"] for r in backend.get_records("Member")] == ["Ann"]

    @pytest.mark.asyncio
    async def test_does_not_validate(self, members: ModelRegistry) -> None:
        """Test the model only needs its primary key."""
        result = await remove(members, Member(id=3, name=""))
        assert result.validation is None
        assert result.meta["total_count"] == 1

    @pytest.mark.asyncio
    async def test_needs_where_without_primary_key(self, members: ModelRegistry) -> None:
        """Test models without a primary key need an explicit where clause."""
        with pytest.raises(ArgumentError, match="must be called with a where clause"):
            await remove(members, LogLine(text="x"))

    @pytest.mark.asyncio
    async def test_not_stored(self, members: ModelRegistry) -> None:
        """Test models with stored: False can't be removed."""
        with pytest.raises(ConfigurationError, match=r"Cannot call remove\(\)"):
            await remove(members, Preview(id=1))

    @pytest.mark.asyncio
    async def test_requires_model_instance(self, members: ModelRegistry) -> None:
        """Test remove() needs a model instance."""
        with pytest.raises(ModelError, match="not a Model instance"):
            await remove(members, {"id": 1})  # type: ignore[arg-type]
