import time
from typing import Callable, Protocol

from chord_sync import logger

ProgressCallback = Callable[[float], None]


class PlaybackWidget(Protocol):
    """同期表示が必要とする再生ウィジェットの機能"""

    def load(self, url: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek_to(self, seconds: float) -> None: ...

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]: ...


class ClockPlayer:
    """経過時間を時計で数える再生ウィジェット

    動画そのものは st.video が再生し、こちらは再生位置だけを管理する。
    poll() を定期的に呼ぶと、再生中なら progress_interval 秒ごとに
    購読者へ再生位置(秒)を通知する。

    Attributes
    ----------
    url
    progress_interval
    """

    def __init__(
        self,
        progress_interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = ""
        self.progress_interval = progress_interval
        self._clock = clock
        self._offset = 0.0
        self._started_at: float | None = None
        self._last_emitted_at: float | None = None
        self._listeners: list[ProgressCallback] = []

    @property
    def playing(self) -> bool:
        return self._started_at is not None

    @property
    def played_seconds(self) -> float:
        if self._started_at is None:
            return self._offset
        return self._offset + self._clock() - self._started_at

    def load(self, url: str) -> None:
        self.pause()
        self.url = url
        self._offset = 0.0
        self._last_emitted_at = None
        logger.logger.info(f"loaded video source: {url}")

    def play(self) -> None:
        if self.playing:
            return
        self._started_at = self._clock()
        self._last_emitted_at = None

    def pause(self) -> None:
        if not self.playing:
            return
        self._offset = self.played_seconds
        self._started_at = None

    def seek_to(self, seconds: float) -> None:
        self._offset = max(0.0, seconds)
        if self.playing:
            self._started_at = self._clock()
        self._last_emitted_at = None

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """再生位置の通知を購読する。戻り値を呼ぶと購読をやめる"""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def poll(self) -> bool:
        """通知のタイミングなら購読者に再生位置を送り、送ったかどうかを返す"""
        if not self.playing:
            return False
        now = self._clock()
        if (
            self._last_emitted_at is not None
            and now - self._last_emitted_at < self.progress_interval
        ):
            return False
        self._last_emitted_at = now
        seconds = self.played_seconds
        for callback in list(self._listeners):
            callback(seconds)
        return True
