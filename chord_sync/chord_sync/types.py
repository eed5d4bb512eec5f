from typing import TypedDict

import pydantic


class LyricLine(pydantic.BaseModel, frozen=True):
    chords: str = pydantic.Field(default="", description="歌詞の上に等幅で揃えたコード")
    lyrics: str = pydantic.Field(description="歌詞、または [Guitar Solo] のような間奏の表記")
    timestamp: float | None = pydantic.Field(default=None, description="行の開始秒")

    @property
    def is_timed(self) -> bool:
        """自動スクロールに使えるタイムスタンプを持っているか"""
        return self.timestamp is not None and self.timestamp >= 0


class SongData(pydantic.BaseModel, frozen=True, populate_by_name=True):
    song_title: str = pydantic.Field(alias="songTitle", min_length=1, description="曲名")
    artist: str = pydantic.Field(min_length=1, description="アーティスト")
    lines: list[LyricLine] = pydantic.Field(min_length=1, description="再生順の歌詞の行")


# Gemini の response_schema に渡す型
class LyricLineDict(TypedDict):
    chords: str
    lyrics: str
    timestamp: float


class SongDataDict(TypedDict):
    songTitle: str
    artist: str
    lines: list[LyricLineDict]
