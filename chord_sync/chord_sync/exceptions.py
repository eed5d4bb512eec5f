"""chord_sync の例外"""


class ChordSyncError(Exception):
    """chord_sync の基底例外"""


class ConfigError(ChordSyncError):
    """設定値が不正"""


class GenerationError(ChordSyncError):
    """コードと歌詞の生成に失敗した"""


class InvalidRequest(GenerationError):
    """入力が空などで、リクエストを送れない"""


class UpstreamUnavailable(GenerationError):
    """API 呼び出し自体が失敗した (ネットワーク、レート制限など)"""


class MalformedResponse(GenerationError):
    """レスポンスが JSON として読めない"""


class IncompleteResult(GenerationError):
    """JSON は読めたが曲名・アーティスト・歌詞のいずれかが欠けている"""
