from typing import Callable, Sequence

from chord_sync import exceptions, logger, types
from chord_sync.player import PlaybackWidget


def has_timestamps(lines: Sequence[types.LyricLine]) -> bool:
    """1行でも 0 以上のタイムスタンプがあれば True"""
    return any(line.is_timed for line in lines)


def find_active_line(lines: Sequence[types.LyricLine], played_seconds: float) -> int:
    """再生位置までに始まった最後の行の番号を返す。無ければ -1

    タイムスタンプが昇順でなくても並べ替えず、後ろから見て最初に該当した行を返す。

    Parameters
    ----------
    lines
    played_seconds
        現在の再生位置(秒)
    """
    for i in range(len(lines) - 1, -1, -1):
        timestamp = lines[i].timestamp
        if lines[i].is_timed and timestamp is not None and timestamp <= played_seconds:
            return i
    return -1


class SyncedDisplay:
    """1曲分の表示セッション

    再生ウィジェットの進捗通知を受けて、今歌われている行(active line)を更新する。

    Attributes
    ----------
    song
    player
    on_scroll
        アクティブな行が変わったときに行番号を受け取るコールバック
    video_source_url
    is_playing
    played_seconds
    active_line_index
        -1 はアクティブな行なし
    """

    def __init__(
        self,
        song: types.SongData,
        player: PlaybackWidget,
        on_scroll: Callable[[int], None] | None = None,
    ) -> None:
        self.player = player
        self.on_scroll = on_scroll
        self.video_source_url = ""
        self.is_playing = False
        self._unsubscribe: Callable[[], None] | None = None
        self._session = 0
        self.load_song(song)

    @property
    def has_timestamps(self) -> bool:
        return has_timestamps(self.song.lines)

    def load_song(self, song: types.SongData) -> None:
        """曲を差し替えて、再生位置と選択をリセットする

        読み込みごとにセッション番号を進め、古いセッションで購読したコールバックに
        届いた進捗は捨てる。前の曲の進捗が新しい歌詞に適用されることはない
        """
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._session += 1
        session = self._session
        self.song = song
        self.active_line_index = -1
        self.played_seconds = 0.0
        self.player.seek_to(0)

        def handle_progress(played_seconds: float) -> None:
            if session != self._session:
                logger.logger.debug(f"dropped stale progress {played_seconds}")
                return
            self.on_progress(played_seconds)

        self._unsubscribe = self.player.subscribe(handle_progress)
        logger.logger.debug(f"display reset for {song.song_title}")

    def submit_url(self, url: str) -> None:
        """動画を読み込む。読み込み直後は常に一時停止"""
        url = url.strip()
        if url == "":
            raise exceptions.InvalidRequest("Please enter a video URL.")
        self.video_source_url = url
        self.is_playing = False
        self.player.load(url)

    def toggle_play(self) -> None:
        """再生/一時停止を切り替える。再生位置と選択はここでは変えない"""
        self.is_playing = not self.is_playing
        if self.is_playing:
            self.player.play()
        else:
            self.player.pause()

    def video_options(self) -> dict[str, int | bool]:
        """動画要素(st.video)に渡す再生位置と再生状態

        再生/一時停止や曲の切り替えによる頭出しを動画側にも反映させる
        """
        return {"start_time": int(self.played_seconds), "autoplay": self.is_playing}

    def on_progress(self, played_seconds: float) -> None:
        """進捗通知のコールバック"""
        self.played_seconds = played_seconds
        if not self.is_playing:
            return

        index = find_active_line(self.song.lines, played_seconds)
        if index == self.active_line_index:
            return
        self.active_line_index = index
        if index != -1 and self.on_scroll is not None:
            self.on_scroll(index)
