"""Scene and source CRUD tests."""

import pytest

from switchdesk.core.errors import ConflictError, NotFoundError
from switchdesk.registry.seed import initial_scenes, initial_sources
from switchdesk.schemas import SceneCreate, SceneSourceIn, SceneUpdate, SourceCreate
from switchdesk.services import SceneService
from tests.helpers import FakeChannel


@pytest.fixture
def service(registry, hub) -> SceneService:
    for scene in initial_scenes():
        registry.scenes.save(scene)
    for source in initial_sources():
        registry.sources.save(source)
    return SceneService(registry.scenes, registry.sources, hub)


class TestSaveScene:
    @pytest.mark.asyncio
    async def test_new_scene_gets_id(self, service, listener: FakeChannel):
        scene = await service.save_scene(SceneCreate(name="Interview", layout="split_vertical"))

        assert scene.id.startswith("scene_")
        assert service.get_scene(scene.id).layout == "split_vertical"
        assert listener.of_type("scene_saved")[0]["scene"]["id"] == scene.id

    @pytest.mark.asyncio
    async def test_resave_keeps_created_at(self, service):
        original = service.get_scene("scene_default_1")

        replaced = await service.save_scene(SceneCreate(id="scene_default_1", name="Studio B"))

        assert replaced.name == "Studio B"
        assert replaced.created_at == original.created_at
        assert replaced.updated_at > original.updated_at
        assert replaced.sources == []

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            SceneCreate(name="")


class TestUpdateScene:
    @pytest.mark.asyncio
    async def test_merge_keeps_other_fields(self, service, listener: FakeChannel):
        before = service.get_scene("scene_default_2")

        after = await service.update_scene("scene_default_2", SceneUpdate(name="Two Shot"))

        assert after.name == "Two Shot"
        assert after.layout == before.layout
        assert after.sources == before.sources
        assert after.transitions == before.transitions
        assert after.created_at == before.created_at
        assert after.updated_at > before.updated_at

        event = listener.of_type("scene_updated")[0]
        assert event["scene_id"] == "scene_default_2"
        assert event["scene"]["name"] == "Two Shot"

    @pytest.mark.asyncio
    async def test_sources_replaced_as_a_whole(self, service):
        updates = SceneUpdate(sources=[SceneSourceIn(id="source_cam_2", x=0, y=0)])

        after = await service.update_scene("scene_default_1", updates)

        assert [source.id for source in after.sources] == ["source_cam_2"]

    @pytest.mark.asyncio
    async def test_unknown_scene(self, service, listener: FakeChannel):
        with pytest.raises(NotFoundError):
            await service.update_scene("scene_missing", SceneUpdate(name="x"))
        assert listener.sent == []

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            SceneUpdate.model_validate({"colour": "red"})


class TestDeleteScene:
    @pytest.mark.asyncio
    async def test_delete_leaves_sources(self, service, listener: FakeChannel):
        await service.delete_scene("scene_default_1")

        with pytest.raises(NotFoundError):
            service.get_scene("scene_default_1")
        assert len(service.list_sources()) == 3
        assert listener.of_type("scene_deleted")[0]["scene_id"] == "scene_default_1"

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_scene("scene_missing")


class TestSetScene:
    @pytest.mark.asyncio
    async def test_program_and_preview_tracked(self, service, listener: FakeChannel):
        assert await service.set_scene("scene_default_1") is None
        assert await service.set_scene("scene_default_2", "preview") is None
        previous = await service.set_scene("scene_default_2")

        assert previous == "scene_default_1"
        assert service.program_scene_id == "scene_default_2"
        assert service.preview_scene_id == "scene_default_2"
        changed = listener.of_type("scene_changed")
        assert [event["target"] for event in changed] == ["program", "preview", "program"]
        assert changed[-1]["scene_id"] == "scene_default_2"
        assert changed[-1]["previous"] == "scene_default_1"

    @pytest.mark.asyncio
    async def test_unknown_scene(self, service, listener: FakeChannel):
        with pytest.raises(NotFoundError):
            await service.set_scene("scene_missing")
        assert service.program_scene_id is None
        assert listener.sent == []

    @pytest.mark.asyncio
    async def test_delete_clears_program(self, service):
        await service.set_scene("scene_default_1")

        await service.delete_scene("scene_default_1")

        assert service.program_scene_id is None


class TestSources:
    @pytest.mark.asyncio
    async def test_add_source(self, service, listener: FakeChannel):
        source = await service.add_source(
            SourceCreate(name="Wireless Mic", type="audio", settings={"sample_rate": 48000})
        )

        assert source.id.startswith("source_")
        assert source.settings.sample_rate == 48000
        assert len(service.list_sources()) == 4
        assert listener.of_type("source_added")[0]["source"]["name"] == "Wireless Mic"

    @pytest.mark.asyncio
    async def test_duplicate_id_conflicts(self, service):
        with pytest.raises(ConflictError):
            await service.add_source(SourceCreate(id="source_cam_1", name="Again"))
