import json

import llm_clients
import pydantic

from chord_sync import exceptions, logger, types

PROMPT = """\
Analyze the song "{song_name}" and provide its guitar chords and original lyrics.

Follow these instructions precisely:
1.  Identify the song title and original artist.
2.  Break down the song into lines of lyrics.
3.  For each line of lyrics, determine the correct guitar chords that should be played.
4.  Place the chord names in a string directly above the lyric syllable where the chord change occurs.
5.  Ensure the 'chords' and 'lyrics' strings in the output are properly aligned for display in a monospaced font. Use spaces in the chord line to position chords correctly over the lyrics.
6.  If a line is instrumental (like an intro or solo), represent it in the lyrics field (e.g., "[Guitar Solo]") and provide the chords above it.
7.  If a line has no chords, the 'chords' field should be an empty string.
8.  For each line, provide a 'timestamp' in seconds indicating when that line starts in the song. This is crucial for the autoscroll feature.
9.  Format the entire output as a single JSON object matching the provided schema. Do not include any text or markdown formatting before or after the JSON object.
"""

UNAVAILABLE_MESSAGE = (
    "Could not retrieve chord data. The API might be unavailable or the request failed."
)
MALFORMED_MESSAGE = "Failed to parse the response from the AI. The data format was invalid."
INCOMPLETE_MESSAGE = (
    "The returned data is incomplete. The song might be obscure or the analysis failed."
)


class ChordFetcher:
    """曲名からコード付きの歌詞を生成する

    Attributes
    ----------
    messages
        直近のリクエストで送ったメッセージ
    llm
    """

    def __init__(self, llm: llm_clients.Gemini):
        self.messages: tuple[llm_clients.TupleMessage, ...] = ()
        self.llm = llm

    def fetch(self, song_name: str) -> types.SongData:
        """1回だけリクエストして SongData を返す

        Parameters
        ----------
        song_name
            曲名 (アーティスト名を含めてもよい)
        """
        self.messages = self._build_messages(song_name)
        try:
            text = self.llm.fetch(self.messages, types.SongDataDict)
        except Exception as e:
            logger.logger.exception(f"chord request failed: {song_name}")
            raise exceptions.UpstreamUnavailable(UNAVAILABLE_MESSAGE) from e
        return self._parse(text)

    async def fetch_async(self, song_name: str) -> types.SongData:
        """fetch の非同期版"""
        self.messages = self._build_messages(song_name)
        try:
            text = await self.llm.fetch_async(self.messages, types.SongDataDict)
        except Exception as e:
            logger.logger.exception(f"chord request failed: {song_name}")
            raise exceptions.UpstreamUnavailable(UNAVAILABLE_MESSAGE) from e
        return self._parse(text)

    @staticmethod
    def _build_messages(song_name: str) -> tuple[llm_clients.TupleMessage, ...]:
        song_name = song_name.strip()
        if song_name == "":
            raise exceptions.InvalidRequest("Please enter a song name.")
        return (llm_clients.TupleMessageUser(content=PROMPT.format(song_name=song_name)),)

    @staticmethod
    def _parse(text: str) -> types.SongData:
        """レスポンスのテキストを SongData に変換する

        JSON として読めなければ MalformedResponse、
        必須項目が欠けていれば IncompleteResult を送出する
        """
        try:
            data = json.loads(text.strip())
        except json.JSONDecodeError as e:
            logger.logger.warning(f"response is not valid JSON: {text[:200]!r}")
            raise exceptions.MalformedResponse(MALFORMED_MESSAGE) from e

        try:
            song = types.SongData.model_validate(data)
        except pydantic.ValidationError as e:
            logger.logger.warning(f"response is incomplete: {e}")
            raise exceptions.IncompleteResult(INCOMPLETE_MESSAGE) from e

        logger.logger.info(f"fetched {song.song_title} / {song.artist}: {len(song.lines)} lines")
        return song
