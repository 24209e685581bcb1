"""Input acquisition for hosts: size ceiling and byte-range segments.

The report builder works on text already in memory. Files above the size
ceiling are not read whole; the caller picks a contiguous ``start``, ``middle``
or ``end`` slice of at most ``max_bytes`` and runs the full pipeline on that
slice as if it were the whole file. A slice may cut the first or last line in
half; such a fragment simply fails to parse and is dropped like any bad row.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple

from rf_report_builder.models.outcome import IngestError


Segment = Literal["start", "middle", "end"]
SEGMENTS: Tuple[str, ...] = ("start", "middle", "end")

MAX_INPUT_BYTES = 50 * 1024 * 1024


@dataclass(frozen=True)
class SourceConfig:
    """
    max_bytes: ceiling for whole-file reads, and the size of a segment slice
    encoding: text encoding; the default also drops a UTF-8 byte-order mark
    errors: decode error policy (undecodable bytes never abort ingestion)
    """
    max_bytes: int = MAX_INPUT_BYTES
    encoding: str = "utf-8-sig"
    errors: str = "replace"

    def __post_init__(self) -> None:
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be > 0")


@dataclass(frozen=True)
class SourceText:
    """Decoded input plus where it came from."""

    name: str
    text: str
    total_bytes: int
    byte_range: Tuple[int, int]
    segment: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.byte_range != (0, self.total_bytes)


def segment_range(total_bytes: int, segment: Segment, max_bytes: int) -> Tuple[int, int]:
    """Byte range ``[start, end)`` of a segment of at most *max_bytes*.

    Examples
    --------
    >>> segment_range(100, "start", 40)
    (0, 40)
    >>> segment_range(100, "middle", 40)
    (30, 70)
    >>> segment_range(100, "end", 40)
    (60, 100)
    """
    size = int(total_bytes)
    m = int(max_bytes)
    if segment == "start":
        start = 0
    elif segment == "middle":
        start = max(0, size // 2 - m // 2)
    elif segment == "end":
        start = max(0, size - m)
    else:
        raise ValueError(f"segment must be one of {SEGMENTS}, got {segment!r}")
    return start, min(size, start + m)


def _too_large(name: str, total: int, max_bytes: int) -> IngestError:
    return IngestError(
        f"{name}: {total} bytes exceeds the {max_bytes}-byte limit; choose a segment ({', '.join(SEGMENTS)})",
        kind="too_large",
    )


def decode_source(
    data: bytes,
    name: str,
    *,
    segment: Optional[Segment] = None,
    config: Optional[SourceConfig] = None,
) -> SourceText:
    """Decode in-memory bytes, enforcing the ceiling or slicing a segment."""
    cfg = config or SourceConfig()
    total = len(data)
    if segment is None:
        if total > cfg.max_bytes:
            raise _too_large(name, total, cfg.max_bytes)
        start, end = 0, total
        label = name
    else:
        start, end = segment_range(total, segment, cfg.max_bytes)
        label = f"{name} [{segment}]"
    text = data[start:end].decode(cfg.encoding, errors=cfg.errors)
    return SourceText(name=label, text=text, total_bytes=total, byte_range=(start, end), segment=segment)


def read_source(
    path: str | Path,
    *,
    segment: Optional[Segment] = None,
    config: Optional[SourceConfig] = None,
) -> SourceText:
    """Read a file from disk; only the selected segment is loaded for large files."""
    cfg = config or SourceConfig()
    p = Path(path).expanduser().resolve()
    if not p.exists() or not p.is_file():
        raise FileNotFoundError(str(p))

    total = p.stat().st_size
    if segment is None:
        if total > cfg.max_bytes:
            raise _too_large(p.name, total, cfg.max_bytes)
        return decode_source(p.read_bytes(), p.name, config=cfg)

    start, end = segment_range(total, segment, cfg.max_bytes)
    with open(p, "rb") as f:
        f.seek(start)
        chunk = f.read(end - start)
    text = chunk.decode(cfg.encoding, errors=cfg.errors)
    return SourceText(
        name=f"{p.name} [{segment}]",
        text=text,
        total_bytes=total,
        byte_range=(start, end),
        segment=segment,
    )
