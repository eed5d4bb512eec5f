import json

import pytest

from chord_sync import exceptions, types
from chord_sync.entities import ChordFetcher
from chord_sync.entities import chord_fetcher


def test_fetch_returns_song_data(fake_llm_factory, minimal_payload):
    llm = fake_llm_factory(minimal_payload)

    song = ChordFetcher(llm).fetch("X")

    assert isinstance(song, types.SongData)
    assert song.model_dump(by_alias=True) == minimal_payload
    assert song.song_title == "X"
    assert song.lines[0].timestamp == 0


def test_fetch_sends_prompt_and_schema(fake_llm_factory, minimal_payload):
    llm = fake_llm_factory(minimal_payload)
    fetcher = ChordFetcher(llm)

    fetcher.fetch("  Wonderwall  ")

    assert len(llm.calls) == 1
    messages, schema = llm.calls[0]
    assert schema is types.SongDataDict
    assert messages == fetcher.messages
    assert len(messages) == 1
    assert messages[0].role == "user"
    assert 'Analyze the song "Wonderwall"' in messages[0].content
    assert "monospaced font" in messages[0].content
    assert "timestamp" in messages[0].content


def test_fetch_tolerates_surrounding_whitespace(fake_llm_factory, minimal_payload):
    llm = fake_llm_factory(text="\n  " + json.dumps(minimal_payload) + "  \n")

    assert ChordFetcher(llm).fetch("X").artist == "Y"


def test_fetch_keeps_line_order_and_missing_timestamps(fake_llm_factory):
    payload = {
        "songTitle": "Song",
        "artist": "Band",
        "lines": [
            {"chords": "G    C", "lyrics": "[Intro]"},
            {"chords": "", "lyrics": "spoken", "timestamp": 4.5},
            {"chords": "Em", "lyrics": "sung", "timestamp": None},
        ],
    }

    song = ChordFetcher(fake_llm_factory(payload)).fetch("Song")

    assert [line.lyrics for line in song.lines] == ["[Intro]", "spoken", "sung"]
    assert [line.timestamp for line in song.lines] == [None, 4.5, None]
    assert song.lines[0].chords == "G    C"


def test_invalid_json_raises_malformed_response(fake_llm_factory):
    llm = fake_llm_factory(text="Sure! Here are the chords: {")

    with pytest.raises(exceptions.MalformedResponse) as excinfo:
        ChordFetcher(llm).fetch("X")

    assert "data format was invalid" in str(excinfo.value)
    assert isinstance(excinfo.value, exceptions.GenerationError)


def test_missing_fields_raise_incomplete_result(fake_llm_factory):
    llm = fake_llm_factory({"songTitle": "X"})

    with pytest.raises(exceptions.IncompleteResult) as excinfo:
        ChordFetcher(llm).fetch("X")

    assert "incomplete" in str(excinfo.value)


@pytest.mark.parametrize(
    "payload",
    [
        {"songTitle": "X", "artist": "Y", "lines": []},
        {"songTitle": "", "artist": "Y", "lines": [{"chords": "", "lyrics": "a"}]},
        {"songTitle": "X", "artist": "", "lines": [{"chords": "", "lyrics": "a"}]},
        {"songTitle": "X", "artist": "Y", "lines": [{"chords": "C"}]},
        ["not", "an", "object"],
    ],
)
def test_empty_or_missing_values_are_incomplete(fake_llm_factory, payload):
    with pytest.raises(exceptions.IncompleteResult):
        ChordFetcher(fake_llm_factory(payload)).fetch("X")


def test_upstream_failure_raises_upstream_unavailable(fake_llm_factory):
    error = RuntimeError("429 rate limited")
    llm = fake_llm_factory(error=error)

    with pytest.raises(exceptions.UpstreamUnavailable) as excinfo:
        ChordFetcher(llm).fetch("X")

    assert excinfo.value.__cause__ is error
    assert str(excinfo.value) == chord_fetcher.UNAVAILABLE_MESSAGE


def test_failure_kinds_are_distinct():
    kinds = {
        exceptions.UpstreamUnavailable,
        exceptions.MalformedResponse,
        exceptions.IncompleteResult,
    }
    for kind in kinds:
        assert issubclass(kind, exceptions.GenerationError)
        assert not any(issubclass(kind, other) for other in kinds - {kind})


def test_blank_song_name_is_rejected_without_request(fake_llm_factory, minimal_payload):
    llm = fake_llm_factory(minimal_payload)

    with pytest.raises(exceptions.InvalidRequest):
        ChordFetcher(llm).fetch("   ")

    assert llm.calls == []


@pytest.mark.asyncio
async def test_fetch_async_returns_song_data(fake_llm_factory, minimal_payload):
    song = await ChordFetcher(fake_llm_factory(minimal_payload)).fetch_async("X")

    assert song.model_dump(by_alias=True) == minimal_payload


@pytest.mark.asyncio
async def test_fetch_async_classifies_errors(fake_llm_factory):
    with pytest.raises(exceptions.UpstreamUnavailable):
        await ChordFetcher(fake_llm_factory(error=TimeoutError())).fetch_async("X")

    with pytest.raises(exceptions.MalformedResponse):
        await ChordFetcher(fake_llm_factory(text="not json")).fetch_async("X")
