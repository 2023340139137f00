"""Shared CLI output helpers."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

console = Console()

BANNER = (
    "██████╗  ██████╗██╗     ██╗██████╗     ███╗   ███╗ ██████╗██████╗ ",
    "██╔══██╗██╔════╝██║     ██║╚════██╗    ████╗ ████║██╔════╝██╔══██╗",
    "██████╔╝██║     ██║     ██║ █████╔╝    ██╔████╔██║██║     ██████╔╝",
    "██╔═══╝ ██║     ██║     ██║██╔═══╝     ██║╚██╔╝██║██║     ██╔═══╝ ",
    "██║     ╚██████╗███████╗██║███████╗    ██║ ╚═╝ ██║╚██████╗██║     ",
    "╚═╝      ╚═════╝╚══════╝╚═╝╚══════╝    ╚═╝     ╚═╝ ╚═════╝╚═╝     ",
)
TAGLINE = "          Model Context Protocol Server over HTTP          "

GRADIENT_START = (36, 144, 255)
GRADIENT_END = (255, 120, 48)


def lerp(a: int, b: int, t: float) -> int:
    """Linear interpolation between two 0-255 channel values."""
    return int(a + (b - a) * t)


def gradient_line(
    line: str,
    start: tuple[int, int, int] = GRADIENT_START,
    end: tuple[int, int, int] = GRADIENT_END,
) -> Text:
    """Colour *line* left to right from *start* to *end*."""
    text = Text()
    steps = max(len(line) - 1, 1)
    for i, ch in enumerate(line):
        t = i / steps
        r, g, b = (lerp(s, e, t) for s, e in zip(start, end))
        text.append(ch, style=f"rgb({r},{g},{b})")
    return text


def print_banner() -> None:
    for line in BANNER:
        console.print(gradient_line(line))
    console.print(gradient_line(TAGLINE))
    console.print()
