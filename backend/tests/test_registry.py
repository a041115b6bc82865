"""Registry tests - keyed stores, id generation and timestamps."""

import re

import pytest

from switchdesk.core.errors import ConflictError, NotFoundError
from switchdesk.models import Scene, Source
from switchdesk.registry import InMemoryRepository, Registry, generate_id


# =============================================================================
# Id generation
# =============================================================================


class TestGenerateId:
    def test_format(self):
        """Ids are <prefix>_<millis>_<suffix>."""
        assert re.fullmatch(r"stream_\d+_[0-9a-f]{9}", generate_id("stream"))

    def test_unique_in_tight_loop(self):
        ids = {generate_id("record") for _ in range(500)}
        assert len(ids) == 500


# =============================================================================
# InMemoryRepository
# =============================================================================


@pytest.fixture
def scenes() -> InMemoryRepository[Scene]:
    return InMemoryRepository("scene", "scene")


class TestCreate:
    def test_assigns_id_when_missing(self, scenes):
        scene = scenes.create(Scene(id="", name="Interview"))

        assert scene.id.startswith("scene_")
        assert scene.id in scenes
        assert scene.created_at is not None
        assert scene.updated_at == scene.created_at

    def test_keeps_given_id(self, scenes):
        scene = scenes.create(Scene(id="scene_x", name="X"))
        assert scene.id == "scene_x"

    def test_duplicate_id_conflicts(self, scenes):
        scenes.create(Scene(id="scene_x", name="X"))

        with pytest.raises(ConflictError):
            scenes.create(Scene(id="scene_x", name="Other"))
        assert scenes.get("scene_x").name == "X"


class TestSave:
    def test_upsert_preserves_created_at(self, scenes):
        first = scenes.save(Scene(id="scene_x", name="X"))
        second = scenes.save(Scene(id="scene_x", name="Renamed"))

        assert second.name == "Renamed"
        assert second.created_at == first.created_at
        assert second.updated_at > first.updated_at
        assert len(scenes) == 1


class TestUpdate:
    def test_merges_only_given_fields(self, scenes):
        scenes.create(Scene(id="scene_x", name="X", description="keep me", layout="pip"))

        updated = scenes.update("scene_x", name="Y")

        assert updated.name == "Y"
        assert updated.description == "keep me"
        assert updated.layout == "pip"

    def test_updated_at_strictly_increases(self, scenes):
        stamps = [scenes.create(Scene(id="scene_x", name="X")).updated_at]
        for index in range(20):
            stamps.append(scenes.update("scene_x", name=f"n{index}").updated_at)

        assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))

    def test_id_and_created_at_cannot_change(self, scenes):
        created = scenes.create(Scene(id="scene_x", name="X"))

        updated = scenes.update("scene_x", id="scene_y", created_at=None)

        assert updated.id == "scene_x"
        assert updated.created_at == created.created_at
        assert "scene_y" not in scenes

    def test_missing_raises_not_found(self, scenes):
        with pytest.raises(NotFoundError) as info:
            scenes.update("nope", name="Y")
        assert info.value.kind == "scene"
        assert info.value.entity_id == "nope"


class TestLookupAndDelete:
    def test_get_missing(self, scenes):
        with pytest.raises(NotFoundError, match="Scene nope not found"):
            scenes.get("nope")

    def test_find_missing_returns_none(self, scenes):
        assert scenes.find("nope") is None

    def test_delete(self, scenes):
        scenes.create(Scene(id="scene_x", name="X"))

        removed = scenes.delete("scene_x")

        assert removed.id == "scene_x"
        assert "scene_x" not in scenes
        with pytest.raises(NotFoundError):
            scenes.delete("scene_x")

    def test_discard_is_quiet(self, scenes):
        assert scenes.discard("nope") is None

    def test_list_preserves_insertion_order(self, scenes):
        for name in ("a", "b", "c"):
            scenes.create(Scene(id=f"scene_{name}", name=name))
        assert [scene.name for scene in scenes.list_all()] == ["a", "b", "c"]


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:
    def test_counts(self):
        registry = Registry()
        registry.sources.create(Source(id="source_a", name="A"))

        counts = registry.counts()

        assert counts == {
            "streams": 0,
            "recordings": 0,
            "scenes": 0,
            "sources": 1,
            "hardware": 0,
        }

    def test_recording_ids_use_record_prefix(self):
        assert Registry().recordings.new_id().startswith("record_")
