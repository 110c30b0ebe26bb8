from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class SongIn(BaseModel):
    """
    请求体。id 可以出现，但永远不会被使用
    """
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: StrictInt | None = None
    group: str = ''
    song: str = ''
    release_date: str = Field('', alias='releaseDate')
    text: str = ''
    link: str = ''

    @field_validator('group', 'song', 'release_date', 'text', 'link', mode='before')
    @classmethod
    def null_as_empty(cls, value):
        return '' if value is None else value

    def song_fields(self) -> dict[str, str]:
        """
        除 id 以外的全部字段，用于整体替换
        """
        return self.model_dump(exclude={'id'})


class SongOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    group: str
    song: str
    release_date: str = Field(alias='releaseDate')
    text: str
    link: str
