"""Rich theme and off-screen console for rendering results to text.

Renderers draw into a console whose file is a StringIO, and the caller
receives plain text. Rich emits no ANSI codes when the file is not a
terminal, which covers pipes and CliRunner.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.theme import Theme

if TYPE_CHECKING:
    from collections.abc import Iterator

CDN_THEME = Theme(
    {
        "cdn.ok": "bold green",
        "cdn.error": "bold red",
        "cdn.warning": "bold yellow",
        "cdn.op": "bold cyan",
        "cdn.key": "dim",
        "cdn.id": "bold blue",
        "cdn.url": "underline",
        "cdn.host": "green",
    }
)

# Wide enough that full public URLs fit on one table row.
RENDER_WIDTH = 120


class RenderBuffer:
    """Holds the text captured by :func:`capture` once the block exits."""

    text: str = ""


@contextmanager
def capture(*, width: int = RENDER_WIDTH) -> Iterator[tuple[Console, RenderBuffer]]:
    """Yield a themed console and a buffer that receives its output.

    Usage::

        with capture() as (console, out):
            console.print("hello")
        out.text  # "hello\\n"
    """
    stream = StringIO()
    console = Console(file=stream, theme=CDN_THEME, highlight=False, width=width)
    buffer = RenderBuffer()
    try:
        yield console, buffer
    finally:
        buffer.text = stream.getvalue()
