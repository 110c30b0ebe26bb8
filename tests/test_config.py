from __future__ import annotations

from song_library.config import Settings


def test_postgres_conn_is_accepted(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_CONN", "postgresql+asyncpg://u:p@db/songs")
    assert Settings(_env_file=None).DATABASE_URL == "postgresql+asyncpg://u:p@db/songs"


def test_server_address() -> None:
    assert Settings(_env_file=None, SERVER_ADDRESS="127.0.0.1:9000").host_port == ("127.0.0.1", 9000)
    assert Settings(_env_file=None, SERVER_ADDRESS=":8081").host_port == ("0.0.0.0", 8081)
