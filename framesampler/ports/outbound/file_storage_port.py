"""Port for persisting uploaded files."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileStoragePort(Protocol):
    def generate_filename(self, prefix: str, original_name: str) -> str: ...
    async def save_stream(self, source, filename: str, max_bytes: int) -> tuple[Path, int]: ...
