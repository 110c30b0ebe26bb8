"""
Tests for SongStore against an in-memory SQLite database.
"""

from __future__ import annotations

import pytest

from song_library.crud.select import build_song_query
from song_library.models import Song
from song_library.stores import SongStore, StoreError
from song_library.stores.song_store import mask_url


async def seed(store: SongStore, *titles: str, group: str = "G") -> list[Song]:
    return [await store.insert(Song(group=group, song=title)) for title in titles]


class TestSongStore:

    async def test_insert_assigns_increasing_ids(self, store: SongStore) -> None:
        a, b = await seed(store, "a", "b")
        assert a.id == 1
        assert b.id == 2

    async def test_get(self, store: SongStore) -> None:
        (a,) = await seed(store, "a")
        fetched = await store.get(a.id)
        assert fetched is not None
        assert fetched.song == "a"
        assert fetched.release_date == ""

    async def test_get_missing(self, store: SongStore) -> None:
        assert await store.get(42) is None

    async def test_find_window_in_insertion_order(self, store: SongStore) -> None:
        await seed(store, "a", "b", "c", "d")
        songs = await store.find(build_song_query(page="2", limit="2"))
        assert [s.song for s in songs] == ["c", "d"]

    async def test_find_filters(self, store: SongStore) -> None:
        await seed(store, "a", "b", group="X")
        await seed(store, "a", group="Y")
        songs = await store.find(build_song_query(group="X", song="a"))
        assert [(s.group, s.song) for s in songs] == [("X", "a")]

    async def test_save_overwrites_by_id(self, store: SongStore) -> None:
        (a,) = await seed(store, "a")
        a.song = "renamed"
        a.text = "la la"
        saved = await store.save(a)
        assert saved.id == a.id

        fetched = await store.get(a.id)
        assert fetched.song == "renamed"
        assert fetched.text == "la la"

    async def test_delete_missing_is_noop(self, store: SongStore) -> None:
        await seed(store, "a")
        await store.delete(99)
        await store.delete(1)
        await store.delete(1)
        assert await store.find(build_song_query()) == []

    async def test_errors_are_wrapped(self) -> None:
        broken = SongStore.from_url("sqlite+aiosqlite:////nonexistent-dir/songs.db")
        with pytest.raises(StoreError):
            await broken.create_schema()
        await broken.dispose()


def test_mask_url_hides_password() -> None:
    masked = mask_url("postgresql+asyncpg://user:secret@db:5432/songs")
    assert "secret" not in masked
    assert "user" in masked
