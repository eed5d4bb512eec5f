# pyright: reportUnusedImport=false
from llm_clients.gemini import Gemini
from llm_clients.types import (
    TupleMessage,
    TupleMessageAssistant,
    TupleMessageSystem,
    TupleMessageUser,
)
