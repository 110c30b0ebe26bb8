"""
python -m song_library

监听地址取自 SERVER_ADDRESS（host:port）
"""
import uvicorn

from song_library.config import settings


def main():
    host, port = settings.host_port
    uvicorn.run("song_library.main:app", host=host, port=port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
