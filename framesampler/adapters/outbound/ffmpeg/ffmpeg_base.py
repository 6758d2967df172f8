"""
Shared FFmpeg path resolution and asynchronous process execution.
Both ffprobe and ffmpeg run through :func:`run_process`, which drains
stdout and stderr concurrently so a full pipe buffer never stalls the child.
"""
from __future__ import annotations

import asyncio
import codecs
import logging
import re
import shutil
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024
_MAX_PENDING = 1024 * 1024
_LINE_SPLIT = re.compile(r"[\r\n]+")


def get_ffmpeg_path(configured: str = "") -> str:
    """Resolve ffmpeg executable path. Configured value wins, then PATH."""
    if configured:
        return configured
    return shutil.which("ffmpeg") or "ffmpeg"


def get_ffprobe_path(configured: str = "") -> str:
    """Resolve ffprobe executable path. Configured value wins, then PATH."""
    if configured:
        return configured
    return shutil.which("ffprobe") or "ffprobe"


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str


def log_stream_lines(tool: str, level: int = logging.INFO) -> Callable[[str], None]:
    """Build a stderr sink that logs each non-empty line under *tool*."""

    def _sink(text: str) -> None:
        for line in _LINE_SPLIT.split(text):
            line = line.strip()
            if line:
                logger.log(level, "%s: %s", tool, line)

    return _sink


async def _drain(stream: asyncio.StreamReader, sink: Callable[[bytes], None]) -> None:
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        sink(chunk)


async def _drain_lines(stream: asyncio.StreamReader, sink: Callable[[str], None]) -> None:
    """Forward decoded text to *sink*, cut only at line boundaries.

    A write that ends mid-line is held until its terminator arrives, so a
    diagnostic emitted in several writes reaches *sink* whole. Text with no
    terminator is released once it exceeds ``_MAX_PENDING`` and at EOF.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        pending += decoder.decode(chunk)
        cut = max(pending.rfind("\n"), pending.rfind("\r")) + 1
        if cut == 0 and len(pending) > _MAX_PENDING:
            cut = len(pending)
        if cut:
            sink(pending[:cut])
            pending = pending[cut:]
    pending += decoder.decode(b"", final=True)
    if pending:
        sink(pending)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        logger.warning("Killing process %d", proc.pid)
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()


async def run_process(
    cmd: list[str],
    *,
    timeout: Optional[float] = None,
    on_stderr: Optional[Callable[[str], None]] = None,
) -> ProcessResult:
    """Run *cmd* and wait for it to exit.

    Stdout is collected incrementally and returned; stderr is forwarded to
    *on_stderr* in whole lines as they arrive. The result is produced only
    after the process has exited and both streams reached EOF.

    Raises:
        asyncio.TimeoutError: *timeout* seconds elapsed.
        OSError: the executable could not be started.

    On any error, including cancellation and a failing *on_stderr*, the
    process is killed and reaped before the error propagates.
    """
    logger.debug("Running: %s", " ".join(cmd))
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    stdout_chunks: list[bytes] = []

    async def _communicate() -> int:
        drains = [
            asyncio.ensure_future(_drain(proc.stdout, stdout_chunks.append)),
            asyncio.ensure_future(_drain_lines(proc.stderr, on_stderr or (lambda text: None))),
        ]
        try:
            await asyncio.gather(*drains)
        finally:
            for task in drains:
                task.cancel()
        return await proc.wait()

    try:
        returncode = await asyncio.wait_for(_communicate(), timeout)
    except BaseException:
        await _kill(proc)
        raise

    return ProcessResult(
        returncode=returncode,
        stdout=b"".join(stdout_chunks).decode("utf-8", errors="replace"),
    )
