# pyright: reportUnusedImport=false
from chord_sync.display import SyncedDisplay, find_active_line, has_timestamps
from chord_sync.entities import ChordFetcher
from chord_sync.exceptions import (
    ChordSyncError,
    ConfigError,
    GenerationError,
    IncompleteResult,
    InvalidRequest,
    MalformedResponse,
    UpstreamUnavailable,
)
from chord_sync.logger import get_logger
from chord_sync.player import ClockPlayer, PlaybackWidget
from chord_sync.types import LyricLine, SongData
