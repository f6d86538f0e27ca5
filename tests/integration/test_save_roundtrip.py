"""Integration tests: ClassStore against the local file backend."""

import json

import pytest

from quickclass.models.class_entry import ClassEntry
from quickclass.services.backend import FileBackend
from quickclass.services.class_store import ClassStore
from quickclass.services.selector import SelectorWidget


@pytest.fixture
def backend(tmp_path):
    return FileBackend(tmp_path / "classes.json")


@pytest.mark.asyncio
async def test_edit_paginate_save_and_reload(backend, numbered_classes):
    await backend.save(numbered_classes(30))
    store = ClassStore(await backend.load_initial())

    edits = store.go_to_page(2)
    edits[0].class_name = "Hero Banner"
    edits[1].class_name = "   "
    store.prev_page(edits)
    store.add_entry(store.get_page())

    result = await store.save(backend)

    assert result.success is True
    reloaded = await backend.load_initial()
    assert len(reloaded) == 29
    assert reloaded[25] == ClassEntry(class_name="hero-banner", description="Entry 25")
    assert store.entries == reloaded
    assert store.current_page == 2


@pytest.mark.asyncio
async def test_import_then_select(backend, sample_classes):
    await backend.save(sample_classes)
    store = ClassStore(await backend.load_initial())

    result = await store.batch_import(backend, "rounded|Ronde hoeken #0af\nbtn-red|Dubbel")

    assert result.success is True
    assert result.message == "2 classes geïmporteerd!"
    assert [e.class_name for e in store.entries][-2:] == ["rounded", "btn-red"]

    changes = []
    selector = SelectorWidget(store.entries, "btn-red", on_change=changes.append)
    selector.toggle("rounded")

    assert changes == ["btn-red rounded"]
    assert selector.selected_tokens == ["btn-red", "rounded"]


@pytest.mark.asyncio
async def test_failed_save_keeps_store_and_file(tmp_path, sample_classes):
    path = tmp_path / "classes.json"
    backend = FileBackend(path)
    await backend.save(sample_classes)
    before = path.read_text()

    # A directory where the file should be makes the write fail
    blocked = FileBackend(tmp_path)
    store = ClassStore(sample_classes)
    store.entries[0].description = "changed"

    result = await store.save(blocked)

    assert result.success is False
    assert store.entries[0].description == "changed"
    assert path.read_text() == before
    assert json.loads(before)[0]["class"] == "btn-red"
