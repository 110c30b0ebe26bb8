from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from sqlalchemy import Select, select

from song_library.models import Song, FILTER_COLUMNS
from song_library.utils.misc import parse_int64, INT64_MAX

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class SongQuery:
    """
    列表查询：分页窗口 + 等值过滤（AND）。只描述查询，不执行。
    """
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    filters: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def to_statement(self) -> Select:
        stmt = select(Song)
        for name, value in self.filters.items():
            stmt = stmt.where(FILTER_COLUMNS[name] == value)
        return (
            stmt
            .order_by(Song.id)
            .offset(self.offset)
            .limit(self.limit)
        )


def parse_positive_int(raw: str | None, default: int) -> int:
    """
    解析失败、超出 64 位或小于 1 时返回默认值，不报错
    """
    value = parse_int64(raw)
    if value is None or value < 1:
        return default
    return value


def build_song_query(
    page: str | None = None,
    limit: str | None = None,
    group: str | None = None,
    song: str | None = None,
    release_date: str | None = None,
) -> SongQuery:
    page_ = parse_positive_int(page, DEFAULT_PAGE)
    limit_ = parse_positive_int(limit, DEFAULT_LIMIT)
    if (page_ - 1) * limit_ > INT64_MAX:
        # 偏移量超出 64 位，按 page 解析失败处理
        page_ = DEFAULT_PAGE

    filters = {
        name: value
        for name, value in (('group', group), ('song', song), ('releaseDate', release_date))
        if value
    }

    return SongQuery(
        offset=(page_ - 1) * limit_,
        limit=limit_,
        filters=MappingProxyType(filters),
    )
