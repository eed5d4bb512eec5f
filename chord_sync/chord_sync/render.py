import html
import math

from chord_sync import types

ACTIVE_STYLE = "background: rgba(120, 53, 15, 0.5); border: 1px solid #b45309;"
INACTIVE_STYLE = "border: 1px solid transparent;"


def sec2str(second: int | float | None) -> str:
    """秒を m:ss 形式の文字列に変換して返す

    Parameters
    ----------
    second
    """
    if second is None or second < 0:
        return "-:--"
    second = math.floor(second)
    return f"{second // 60}:{str(second % 60).zfill(2)}"


def line_html(line: types.LyricLine, index: int, active: bool) -> str:
    """1行分のコードと歌詞を返す。コードが無い行も高さを揃えるため空白を置く"""
    chords = html.escape(line.chords) if line.chords else " "
    lyrics = html.escape(line.lyrics)
    style = ACTIVE_STYLE if active else INACTIVE_STYLE
    return (
        f'<div id="line-{index}" class="line{" active" if active else ""}" '
        f'style="margin-bottom: 1em; padding: 0.3em; border-radius: 6px; {style}">'
        f'<div style="color: #facc15; font-weight: bold; min-height: 1.2em;">{chords}</div>'
        f'<div style="color: #f4f4f5;">{lyrics}</div>'
        "</div>"
    )


def render_song(
    song: types.SongData,
    active_line_index: int = -1,
    max_height: int = 600,
) -> str:
    """歌詞パネル全体の HTML を返す

    アクティブな行があれば、その行をパネルの縦中央へなめらかにスクロールするスクリプトを付ける。
    同じ行がアクティブな間は同じ HTML を返すので、iframe は作り直されない。

    Parameters
    ----------
    song
    active_line_index
    max_height
        パネルの最大の高さ(px)
    """
    lines_str = "".join(
        line_html(line, i, i == active_line_index) for i, line in enumerate(song.lines)
    )
    texts_str = (
        f'<div id="lyrics" style="max-height: {max_height}px; overflow: auto; overflow-y: scroll;">'
        f'<div style="white-space: pre; font-family: \'Roboto Mono\', monospace; font-size: 90%;">'
        f"{lines_str}</div></div>"
    )
    if 0 <= active_line_index < len(song.lines):
        texts_str += (
            "<script>"
            f'document.getElementById("line-{active_line_index}")'
            '.scrollIntoView({behavior: "smooth", block: "center"});'
            "</script>"
        )
    return texts_str
