import logging

from fastapi import APIRouter, Depends, Query, Request, HTTPException, Response, status
from pydantic import ValidationError

from song_library.models import Song
from song_library.schemas.song import SongIn, SongOut
from song_library.crud.select import build_song_query
from song_library.stores import SongStore, StoreError, get_song_store
from song_library.utils.misc import parse_int64

logger = logging.getLogger(__name__)

router = APIRouter(tags=['songs'])

NOT_FOUND = "歌曲不存在"
BAD_INPUT = "请求格式错误"

# ===========  小工具函数  ===========

def parse_song_id(raw: str) -> int | None:
    """
    路径里的 id。格式不对或超出 64 位返回 None，调用方按"查无此曲"处理
    """
    return parse_int64(raw)


async def read_song_body(request: Request) -> SongIn:
    try:
        payload = await request.json()
        return SongIn.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.error("请求体格式错误: %s", e)
        raise HTTPException(status.HTTP_400_BAD_REQUEST, BAD_INPUT)


def storage_failure(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def load_song(raw_id: str, store: SongStore) -> Song:
    song_id = parse_song_id(raw_id)
    try:
        song = await store.get(song_id) if song_id is not None else None
    except StoreError:
        raise storage_failure(f"查询歌曲 {raw_id} 失败")
    if song is None:
        logger.error("歌曲 %s 不存在", raw_id)
        raise HTTPException(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return song


# ===========  路由  ===========

@router.get("/songs", response_model=list[SongOut])
async def list_songs(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    group: str | None = Query(None),
    song: str | None = Query(None),
    releaseDate: str | None = Query(None),
    store: SongStore = Depends(get_song_store),
):
    """
    分页 + 等值过滤。page/limit 解析不了就用默认值（1 / 10），不报错
    """
    logger.info("获取歌曲列表")
    query = build_song_query(page, limit, group, song, releaseDate)
    try:
        songs = await store.find(query)
    except StoreError:
        raise storage_failure("获取歌曲列表失败")

    logger.info("找到 %d 首歌曲", len(songs))
    return [SongOut.model_validate(s) for s in songs]


@router.get("/song/{song_id}", response_model=SongOut)
async def get_song(
    song_id: str,
    store: SongStore = Depends(get_song_store),
):
    logger.info("获取歌曲 %s", song_id)
    song = await load_song(song_id, store)
    logger.info("歌曲 %s 已找到", song_id)
    return SongOut.model_validate(song)


@router.post("/song", response_model=SongOut, status_code=status.HTTP_201_CREATED)
async def add_song(
    request: Request,
    store: SongStore = Depends(get_song_store),
):
    """
    请求体里的 id 会被忽略，由数据库分配
    """
    logger.info("添加歌曲")
    body = await read_song_body(request)

    song = Song(**body.song_fields())
    logger.debug("添加歌曲: %r", body)
    try:
        song = await store.insert(song)
    except StoreError:
        raise storage_failure("保存歌曲失败")

    logger.info("歌曲 %s 已添加", song.id)
    return SongOut.model_validate(song)


@router.put("/song/{song_id}", response_model=SongOut)
async def update_song(
    song_id: str,
    request: Request,
    store: SongStore = Depends(get_song_store),
):
    """
    整体替换。先查存在性（404），再解析请求体（400）。
    id 始终取路径里的值，请求体的 id 不参与
    """
    logger.info("更新歌曲 %s", song_id)
    song = await load_song(song_id, store)
    body = await read_song_body(request)

    for name, value in body.song_fields().items():
        setattr(song, name, value)

    logger.debug("更新歌曲 %s: %r", song.id, body)
    try:
        song = await store.save(song)
    except StoreError:
        raise storage_failure(f"更新歌曲 {song_id} 失败")

    logger.info("歌曲 %s 已更新", song_id)
    return SongOut.model_validate(song)


@router.delete("/song/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_song(
    song_id: str,
    store: SongStore = Depends(get_song_store),
):
    """
    不检查是否存在，重复删除也返回 204
    """
    logger.info("删除歌曲 %s", song_id)
    parsed = parse_song_id(song_id)
    if parsed is not None:
        try:
            await store.delete(parsed)
        except StoreError:
            raise storage_failure(f"删除歌曲 {song_id} 失败")

    logger.info("歌曲 %s 已删除", song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
