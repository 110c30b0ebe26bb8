import logging

from sqlalchemy import delete
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from song_library.models import Base, Song
from song_library.crud.select import SongQuery

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """
    数据库操作失败（连接、约束、查询）
    """


def mask_url(url: str) -> str:
    """
    日志里不输出密码
    """
    return make_url(url).render_as_string(hide_password=True)


class SongStore:

    """
    歌曲表的存储网关。
    进程启动时创建一次，所有请求共享；每个操作都是一次独立的数据库往返，不重试。
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "SongStore":
        parsed = make_url(url)
        kwargs: dict = {'echo': echo}
        if parsed.get_backend_name() == 'sqlite' and parsed.database in (None, '', ':memory:'):
            # 内存库：所有会话共用同一个连接，否则每个连接都是一个空库
            kwargs['poolclass'] = StaticPool
        else:
            kwargs['pool_pre_ping'] = True
        return cls(create_async_engine(url, **kwargs))

    # ---------- 生命周期 ----------
    async def create_schema(self):
        """表不存在时建表"""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError("建表失败") from e

    async def dispose(self):
        await self.engine.dispose()

    # ---------- 增删改查 ----------
    async def insert(self, song: Song) -> Song:
        try:
            async with self.session_factory() as session:
                session.add(song)
                await session.commit()
                return song
        except (SQLAlchemyError, OSError) as e:
            raise StoreError("插入失败") from e

    async def get(self, song_id: int) -> Song | None:
        try:
            async with self.session_factory() as session:
                return await session.get(Song, song_id)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"查询 {song_id} 失败") from e

    async def find(self, query: SongQuery) -> list[Song]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(query.to_statement())
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise StoreError("列表查询失败") from e

    async def save(self, song: Song) -> Song:
        """
        按 song.id 写入整条记录
        """
        try:
            async with self.session_factory() as session:
                merged = await session.merge(song)
                await session.commit()
                return merged
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"保存 {song.id} 失败") from e

    async def delete(self, song_id: int):
        """
        不存在的 id 不算错误
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(delete(Song).where(Song.id == song_id))
                await session.commit()
                logger.debug("删除 %s 影响 %d 行", song_id, result.rowcount)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"删除 {song_id} 失败") from e
