from fastapi import Request

from .song_store import SongStore, StoreError


def get_song_store(request: Request) -> SongStore:
    """
    启动时创建的唯一实例，挂在 app.state 上
    """
    return request.app.state.song_store
