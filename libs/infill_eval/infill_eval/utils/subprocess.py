"""Run external media commands without blocking the event loop.

Commands go through `subprocess.run()` on a worker thread; asyncio child
watchers have been seen to hang `.communicate()` on some hosts.
"""

from __future__ import annotations

import asyncio
import subprocess
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RunResult:
    args: tuple[str, ...]
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode(errors="ignore").strip()


async def run_subprocess(args: Sequence[str], *, timeout_s: float | None = None) -> RunResult:
    """Run `args` to completion and capture both streams.

    A missing binary raises FileNotFoundError; a non-zero exit does not raise.
    """
    argv = tuple(str(a) for a in args)
    cp = await asyncio.to_thread(
        subprocess.run,
        list(argv),
        stdin=subprocess.DEVNULL,
        capture_output=True,
        timeout=timeout_s,
    )
    return RunResult(args=argv, returncode=int(cp.returncode), stdout=cp.stdout or b"", stderr=cp.stderr or b"")
