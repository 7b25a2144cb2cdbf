"""Clipboard collaborators for the publish flows."""

import asyncio
import logging
import shutil
import sys
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger("promptshare.clipboard")

# Tried in order; the first one found on PATH is used.
_COPY_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class Clipboard(ABC):
    @abstractmethod
    async def copy(self, text: str) -> bool:
        """Copy ``text``; return True on success."""
        ...


class MemoryClipboard(Clipboard):
    """Keeps the copied text in memory. Used by --print-only and tests."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.text: Optional[str] = None

    async def copy(self, text: str) -> bool:
        if not self.succeed:
            return False
        self.text = text
        return True


def find_copy_command() -> Optional[list[str]]:
    for cmd in _COPY_COMMANDS:
        if cmd[0] == "clip" and sys.platform != "win32":
            continue
        if shutil.which(cmd[0]):
            return cmd
    return None


class SystemClipboard(Clipboard):
    """Pipes text into the platform's clipboard command."""

    def __init__(self, command: Optional[list[str]] = None, timeout: float = 5.0):
        self.command = command
        self.timeout = timeout

    async def copy(self, text: str) -> bool:
        cmd = self.command or find_copy_command()
        if not cmd:
            logger.warning("No clipboard command available (pbcopy, wl-copy, xclip, xsel)")
            return False

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.warning(f"Clipboard copy via {cmd[0]} failed: {e}")
            return False

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(text.encode("utf-8")), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            logger.warning(f"Clipboard copy via {cmd[0]} timed out after {self.timeout}s")
            return False

        if proc.returncode != 0:
            logger.warning(f"Clipboard copy via {cmd[0]} exited {proc.returncode}: {stderr.decode(errors='replace').strip()}")
            return False
        return True
