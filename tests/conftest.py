"""Shared fixtures: a fake Gemini client, a fake playback widget and sample songs."""

import json

import pytest

from chord_sync import types


class FakeLLM:
    """Stands in for llm_clients.Gemini and records every request."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []
        self.fee = 0.0

    def fetch(self, messages, response_schema=None):
        self.calls.append((messages, response_schema))
        if self.error is not None:
            raise self.error
        return self.text

    async def fetch_async(self, messages, response_schema=None):
        return self.fetch(messages, response_schema)


class FakePlayer:
    """Playback widget that only records what it was asked to do."""

    def __init__(self):
        self.events = []
        self.listeners = []

    def load(self, url):
        self.events.append(("load", url))

    def play(self):
        self.events.append(("play",))

    def pause(self):
        self.events.append(("pause",))

    def seek_to(self, seconds):
        self.events.append(("seek_to", seconds))

    def subscribe(self, callback):
        self.listeners.append(callback)

        def unsubscribe():
            self.listeners.remove(callback)

        return unsubscribe

    def emit(self, seconds):
        for callback in list(self.listeners):
            callback(seconds)


@pytest.fixture
def fake_player():
    return FakePlayer()


@pytest.fixture
def minimal_payload():
    return {
        "songTitle": "X",
        "artist": "Y",
        "lines": [{"chords": "", "lyrics": "L1", "timestamp": 0}],
    }


@pytest.fixture
def fake_llm_factory():
    def make(payload=None, text=None, error=None):
        if text is None and payload is not None:
            text = json.dumps(payload)
        return FakeLLM(text=text or "", error=error)

    return make


def make_song(*timestamps, title="Song", artist="Artist"):
    """Build a SongData with one line per timestamp (None for untimed lines)."""
    return types.SongData(
        song_title=title,
        artist=artist,
        lines=[
            types.LyricLine(chords="G", lyrics=f"line {i}", timestamp=t)
            for i, t in enumerate(timestamps)
        ],
    )


@pytest.fixture
def timed_song():
    return make_song(0, 12.5, 30)


@pytest.fixture
def untimed_song():
    return make_song(None, None)


@pytest.fixture
def song_factory():
    return make_song


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
