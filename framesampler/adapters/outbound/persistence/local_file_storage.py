"""Local filesystem implementation of FileStoragePort for uploaded videos."""

from __future__ import annotations

import logging
import random
import re
import time
from pathlib import Path
from typing import Any

from framesampler.core.exceptions import UploadValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8 * 1024 * 1024  # 8MB
_SAFE_SUFFIX = re.compile(r"\.[A-Za-z0-9]{1,10}")


class LocalFileStorage:
    """Implements :class:`FileStoragePort` using the local filesystem.

    Uploads are written under a configurable *base_dir*, which is created on
    construction.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        logger.info("LocalFileStorage initialised at %s", self._base.resolve())

    @property
    def base_dir(self) -> Path:
        return self._base

    def generate_filename(self, prefix: str, original_name: str) -> str:
        """Unique ``<prefix>-<epoch_ms>-<random><ext>`` name keeping the extension."""
        suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        ext = Path(original_name).suffix
        if not _SAFE_SUFFIX.fullmatch(ext):
            ext = ""
        return f"{prefix}-{suffix}{ext}"

    async def save_stream(self, source: Any, filename: str, max_bytes: int) -> tuple[Path, int]:
        """Copy an async-readable *source* to *filename* in chunks.

        Returns the stored path and its size. The partial file is removed
        when more than *max_bytes* arrive.
        """
        target = self._base / Path(filename).name
        total_written = 0
        try:
            with open(target, "wb") as f:
                while True:
                    chunk = await source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total_written += len(chunk)
                    if total_written > max_bytes:
                        raise UploadValidationError(
                            f"File size too large. Maximum size is {_format_size(max_bytes)}"
                        )
                    f.write(chunk)
        except BaseException:
            if target.exists():
                target.unlink()
            raise

        logger.debug("Saved upload %s (%d bytes)", target, total_written)
        return target, total_written


def _format_size(num_bytes: int) -> str:
    for unit, factor in (("GB", 1024 ** 3), ("MB", 1024 ** 2), ("KB", 1024)):
        if num_bytes >= factor and num_bytes % factor == 0:
            return f"{num_bytes // factor}{unit}"
    return f"{num_bytes} bytes"
