"""Diagnostic formatting helpers."""

import traceback
from dataclasses import dataclass

import psutil


def verbose_exception_string(exc: BaseException) -> str:
    """Type, message and traceback of an exception and every exception in its chain."""
    lines: list[str] = []
    current: BaseException | None = exc
    seen: set[int] = set()

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if lines:
            lines.append("")
            lines.append("Inner Exception:")
        lines.append(f" Exception: {type(current).__name__} Message: {str(current) or 'NULL'}")
        stack = "".join(traceback.format_tb(current.__traceback__)).rstrip()
        lines.append(f" StackTrace: {stack or 'NULL'}")
        current = current.__cause__ or current.__context__

    return "\n".join(lines)


def format_clock(seconds: float) -> str:
    """Format a duration as ``HH:MM:SS``."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


@dataclass(frozen=True)
class ProcessUsage:
    cpu_seconds: float
    peak_memory_bytes: int


def process_usage() -> ProcessUsage:
    """Processor time and peak working set of the current process.

    Peak working set is only reported on Windows; elsewhere the current
    resident set size is used.
    """
    process = psutil.Process()
    cpu_times = process.cpu_times()
    memory = process.memory_info()
    return ProcessUsage(
        cpu_seconds=cpu_times.user + cpu_times.system,
        peak_memory_bytes=getattr(memory, "peak_wset", memory.rss),
    )
