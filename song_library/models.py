from sqlalchemy import Integer, Text, MetaData
from sqlalchemy.orm import Mapped, mapped_column, DeclarativeBase

metadata = MetaData()
class Base(DeclarativeBase):
    metadata = metadata
    pass


# ===============  对象表  ================

class Song(Base):
    """
    歌曲
    """
    __tablename__ = "songs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group: Mapped[str] = mapped_column(Text, default="", server_default="")
    song: Mapped[str] = mapped_column(Text, default="", server_default="")
    release_date: Mapped[str] = mapped_column(Text, default="", server_default="")
    text: Mapped[str] = mapped_column(Text, default="", server_default="")
    link: Mapped[str] = mapped_column(Text, default="", server_default="")

    def __repr__(self) -> str:
        return f"Song(id={self.id!r}, group={self.group!r}, song={self.song!r})"


# 查询参数名 -> 列
FILTER_COLUMNS = {
    'group': Song.group,
    'song': Song.song,
    'releaseDate': Song.release_date,
}