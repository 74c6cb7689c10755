"""Reading XPM pixmaps and converting colours to a display's pixel layout."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from solong.colors import find_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the XPM colour ``None``."""

_NAME_LIMIT = 63
_INT_RE = re.compile(r"\s*([+-]?\d+)")
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: row-major 32-bit pixel values (0xRRGGBB)."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]

    def to_bytes(self, bytes_per_pixel: int, big_endian: bool) -> bytes:
        """Pack the pixels, keeping the low ``bytes_per_pixel`` bytes of each."""
        if bytes_per_pixel < 1:
            raise ValueError("bytes_per_pixel must be at least 1")
        mask = (1 << (8 * bytes_per_pixel)) - 1
        order = "big" if big_endian else "little"
        return b"".join((value & mask).to_bytes(bytes_per_pixel, order) for value in self.pixels)


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs only, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _blank_comments(text: str, opener: str, closer: str, keep_closer: bool) -> str:
    chars = list(text)
    in_quote = False
    i = 0
    while i < len(chars):
        if chars[i] == '"':
            in_quote = not in_quote
        elif not in_quote and text.startswith(opener, i):
            end = text.find(closer, i + len(opener))
            stop = len(chars) if end == -1 else end + len(closer)
            chars[i:stop] = " " * (stop - i)
            i = stop
            continue
        i += 1
    return "".join(chars)


def strip_comments(text: str) -> str:
    """Blank out C comments outside quoted strings, keeping the text length.

    Block comments are removed first, then line comments together with the
    newline that ends them. An unterminated comment runs to the end of text.
    """
    text = _blank_comments(text, "/*", "*/", True)
    return _blank_comments(text, "//", "\n", True)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def text_to_rgb(name: str, end: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB.

    ``#hex`` values are read directly; otherwise ``name`` (joined with
    ``end`` by a space when given) is looked up by name. ``None`` gives -1
    and unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX_RE.match(name[1:])
        digits = match.group(2) if match else ""
        value = int(digits, 16) if digits else 0
        if match and match.group(1) == "-":
            value = -value
        return _to_int32(value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    color = find_color(name)
    return 0 if color is None else color


def _atoi(word: str) -> int:
    match = _INT_RE.match(word)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"bad XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if not all(values):
        raise XpmError(f"bad XPM header: {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _color_of(line: str, cpp: int) -> int:
    if len(line) < cpp:
        raise XpmError(f"colour line too short: {line!r}")
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"no 'c' colour in line: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"missing colour after 'c': {line!r}")
    end = words[index + 1] if index + 1 < len(words) else None
    return text_to_rgb(words[index], end)


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an image from the quoted strings of an XPM file, in order."""
    source: Iterator[str] = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise XpmError(f"XPM data ends before {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("the header"))
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("the colour table ends")
        key = line[:cpp]
        color = _color_of(line, cpp)
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    pixels: list[int] = []
    for _ in range(height):
        line = next_line("the pixel rows end")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def _quoted_strings(text: str) -> Iterator[str]:
    for match in re.finditer(r'"([^"]*)"', text):
        yield match.group(1)


def load_xpm_text(text: str) -> XpmImage:
    """Decode the full text of an XPM file."""
    return parse_xpm(_quoted_strings(strip_comments(text)))


def read_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return load_xpm_text(text)


def _shift_and_width(mask: int, channel: str) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"{channel} mask must be positive")
    shift = 0
    while not mask & 1:
        mask >>= 1
        shift += 1
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return shift, bits


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (red shift, red bits, green shift, green bits, blue shift, blue bits)."""
    result: list[int] = []
    for mask, channel in ((red_mask, "red"), (green_mask, "green"), (blue_mask, "blue")):
        result.extend(_shift_and_width(mask, channel))
    return tuple(result)


def to_visual_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert 0xRRGGBB into a pixel for a display of the given depth."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )