import llm_clients
import streamlit
import streamlit.components.v1

import chord_sync
from chord_sync import config, render

MODELS = ["gemini-2.5-flash", "gemini-2.5-pro"]
PANEL_HEIGHT = 620


def _log_scroll(index: int):
    chord_sync.logger.logger.debug(f"active line -> {index}")


def _run(settings: config.Settings, api_key: str, model: str, song_name: str):
    """曲名からコードを生成して表示セッションに読み込む
    結果は streamlit.session_state に格納される

    Parameters
    ----------
    settings
    api_key
    model
    song_name
    """
    llm = llm_clients.Gemini(api_key, model, timeout=settings.request_timeout)
    fetcher = chord_sync.ChordFetcher(llm)
    with streamlit.spinner("コードを生成中..."):
        try:
            song = fetcher.fetch(song_name)
        except chord_sync.GenerationError as e:
            streamlit.error(str(e))
            return
        finally:
            streamlit.session_state["fee"] = streamlit.session_state.get("fee", 0.0) + llm.fee

    if "display" in streamlit.session_state:
        streamlit.session_state["display"].load_song(song)
    else:
        player = chord_sync.ClockPlayer(progress_interval=settings.progress_interval)
        streamlit.session_state["player"] = player
        streamlit.session_state["display"] = chord_sync.SyncedDisplay(
            song, player, on_scroll=_log_scroll
        )


def _autoscroll_controller(display: chord_sync.SyncedDisplay):
    with streamlit.container(border=True):
        streamlit.markdown("**Autoscroll with Music**")
        streamlit.caption("Paste a YouTube link for the song to sync lyrics automatically.")
        with streamlit.form("video", clear_on_submit=False):
            url = streamlit.text_input(
                "URL",
                placeholder="e.g., https://www.youtube.com/watch?v=...",
                label_visibility="collapsed",
            )
            if streamlit.form_submit_button("Load"):
                try:
                    display.submit_url(url)
                except chord_sync.InvalidRequest as e:
                    streamlit.warning(str(e))

        if display.video_source_url:
            play, status = streamlit.columns([1, 5])
            play.button(
                "⏸ Pause" if display.is_playing else "▶ Play", on_click=display.toggle_play
            )
            status.write(f"Status: **{'Playing' if display.is_playing else 'Paused'}**")
            streamlit.video(
                display.video_source_url,
                **display.video_options(),
            )


def _lyrics_panel():
    display: chord_sync.SyncedDisplay = streamlit.session_state["display"]
    player: chord_sync.ClockPlayer = streamlit.session_state["player"]
    player.poll()
    if display.video_source_url:
        streamlit.caption(render.sec2str(display.played_seconds))
    streamlit.components.v1.html(
        render.render_song(
            display.song,
            display.active_line_index,
            max_height=PANEL_HEIGHT - 20,
        ),
        height=PANEL_HEIGHT,
    )


def _display(settings: config.Settings):
    """結果の表示"""
    display: chord_sync.SyncedDisplay = streamlit.session_state["display"]
    streamlit.header(display.song.song_title)
    streamlit.subheader(display.song.artist)

    if display.has_timestamps:
        _autoscroll_controller(display)

    run_every = settings.progress_interval if display.is_playing else None
    streamlit.fragment(run_every=run_every)(_lyrics_panel)()


if __name__ == "__main__":
    streamlit.set_page_config(page_title="Chord Sync", layout="wide")

    try:
        settings = config.Settings.from_env()
    except chord_sync.ConfigError as e:
        streamlit.error(str(e))
        streamlit.stop()

    with streamlit.sidebar:
        logger = chord_sync.get_logger(settings.log_level)

        api_key = streamlit.text_input("API key", value=settings.api_key, type="password")
        model = streamlit.selectbox(
            "model", list(dict.fromkeys([settings.model, *MODELS]))
        )
        streamlit.caption(f"料金: ${streamlit.session_state.get('fee', 0.0):.5f}")

    with streamlit.form("song"):
        song_name = streamlit.text_input("曲名", placeholder="e.g., Wonderwall by Oasis")
        submitted = streamlit.form_submit_button("run")

    if submitted:
        _run(settings, api_key, model, song_name)

    if "display" in streamlit.session_state:
        _display(settings)
