# src/seatbelt/runtime/console_interface.py

"""
Provides the console narration of test runs.

The glyphs and banners written here are scraped by downstream tooling, so they
are kept as plain text without markup.
"""

from rich.console import Console

from seatbelt.state import Counts, ResultKind

BEGIN_UNIT_PREFIX = "==="
END_UNIT_SUFFIX = "==="
RESULT_GLYPHS: dict[ResultKind, str] = {
    ResultKind.PASS: "✅",
    ResultKind.FAIL: "❌",
    ResultKind.ERROR: "🚫",
}
YAY_BANNER = "🟢 YAY! 🟢"
NAY_BANNER = "🔴 NAY! 🔴"
WAITING_FOR_CHANGES = "Waiting for changes..."


class ConsoleInterface:
    """A thin bridge from run events to a rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False, emoji=False)

    def write(self, message: str, style: str | None = None, end: str = "\n") -> None:
        self.console.print(message, style=style, end=end, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def notice(self, message: str, emoji: str | None = None) -> None:
        self.write(f"{emoji} {message}" if emoji else message, style="dim")

    def begin_unit(self, name: str) -> None:
        # A unit prints as one line, "=== name: <glyph> ===", unless the library reports in between.
        self.write(f"{BEGIN_UNIT_PREFIX} {name}: ", style="bold", end="")

    def end_unit(self) -> None:
        self.write(f" {END_UNIT_SUFFIX}")

    def result(self, kind: ResultKind) -> None:
        self.write(RESULT_GLYPHS[kind], end="")

    def summary(self, counts: Counts) -> None:
        self.write(f"seatbelt: tests run, results: {counts.as_dict()}")

    def yay(self) -> None:
        self.write(YAY_BANNER, style="bold green")

    def nay(self, reason: str) -> None:
        self.write(f"{NAY_BANNER} {reason}", style="bold red")
        self.console.bell()

    def waiting_for_changes(self) -> None:
        self.write(WAITING_FOR_CHANGES)


# 🔼⚙️
