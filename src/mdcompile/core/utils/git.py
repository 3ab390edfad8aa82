"""Last-commit timestamp lookup through the git CLI"""

import asyncio
import logging
import os
from typing import Optional


logger = logging.getLogger(__name__)


async def get_git_timestamp(file_path: str) -> Optional[int]:
    """Return the last commit time of file_path in epoch ms, or None if unavailable."""
    try:
        proc = await asyncio.create_subprocess_exec(
            "git", "log", "-1", "--pretty=%at", os.path.basename(file_path),
            cwd=os.path.dirname(file_path) or None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        stdout, _ = await proc.communicate()
    except OSError as e:
        logger.debug("git timestamp lookup failed for %s: %s", file_path, e)
        return None

    out = stdout.decode("utf-8", errors="replace").strip()
    if proc.returncode != 0 or not out:
        return None
    try:
        return int(out) * 1000
    except ValueError:
        return None
