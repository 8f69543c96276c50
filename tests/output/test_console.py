"""Tests for the off-screen Rich console."""

from __future__ import annotations

from rich.text import Text

from cdnctl.output.console import capture


class TestCapture:
    def test_collects_text(self) -> None:
        with capture() as (console, out):
            console.print("hello")
        assert out.text == "hello\n"

    def test_theme_styles_render_plain(self) -> None:
        with capture() as (console, out):
            console.print(Text("OK", style="cdn.ok"), Text("upload", style="cdn.op"))
        assert out.text == "OK upload\n"
        assert "\x1b[" not in out.text

    def test_width(self) -> None:
        with capture(width=10) as (console, out):
            console.print("a" * 25)
        assert out.text.count("\n") == 3
