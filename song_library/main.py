import sys
import asyncio
import logging

# 🔧 Windows 下必须加这一行，放在所有 import 的最前面！
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from song_library.config import Settings, settings as default_settings
from song_library.routers import song
from song_library.stores import SongStore, StoreError
from song_library.stores.song_store import mask_url
from song_library.utils.log import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: SongStore | None = None) -> FastAPI:
    """
    组装应用。store 不传时按 DATABASE_URL 在启动阶段创建；
    连不上数据库或建表失败时启动直接失败，不会开始接收请求
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    # 设置生命周期事件
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        song_store = store
        if song_store is None:
            logger.debug("连接数据库: %s", mask_url(settings.DATABASE_URL))
            song_store = SongStore.from_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

        try:
            await song_store.create_schema()
        except StoreError:
            logger.exception("无法连接数据库或建表失败")
            raise
        logger.info("数据库已连接，表结构就绪")

        app.state.song_store = song_store
        yield
        await song_store.dispose()

    app = FastAPI(title="Song Library", version="1.0.0", lifespan=lifespan)

    # 全局中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    # 挂载子路由
    app.include_router(song.router)

    return app


app = create_app()
