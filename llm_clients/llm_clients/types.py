from typing import Literal, NamedTuple


# メッセージはタプルで持っておく (ハッシュ可能で、プロンプトの記録にそのまま使える)
class TupleMessageUser(NamedTuple):
    content: str
    role: Literal["user"] = "user"


class TupleMessageAssistant(NamedTuple):
    content: str
    role: Literal["assistant"] = "assistant"


class TupleMessageSystem(NamedTuple):
    content: str
    role: Literal["system"] = "system"


TupleMessage = TupleMessageUser | TupleMessageAssistant | TupleMessageSystem
