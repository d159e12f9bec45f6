from __future__ import annotations

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FortuneError(Exception):
    """Base class for failures while fetching a fortune.

    ``message`` is sent to the client verbatim.
    """

    message = "Fail to load fortune"
    status_code = 404

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class FortuneExecutionError(FortuneError):
    """The program could not be started, failed, or timed out."""

    message = "Fail to load fortune"


class FortuneDecodeError(FortuneError):
    """The program wrote something that is not UTF-8."""

    message = "Fail to parse fortune"


def build_command(command: str, category: str) -> list[str]:
    # -a: include offensive fortunes as well
    args = [command, "-a"]
    if category:
        args.append(category)
    return args


async def get_fortune(category: str, *, command: str = "fortune", timeout: Optional[float] = None) -> str:
    """Run the fortune program and return its standard output unmodified.

    An empty ``category`` lets the program pick from every file.
    """
    argv = build_command(command, category)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as exc:
        # ValueError: NUL byte in an argument
        logger.error("Could not start %s: %s", command, exc)
        raise FortuneExecutionError() from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        logger.warning("%s timed out after %ss (category=%r)", command, timeout, category)
        raise FortuneExecutionError()

    if proc.returncode != 0:
        logger.warning(
            "%s exited with status %s (category=%r): %s",
            command,
            proc.returncode,
            category,
            stderr.decode("utf-8", "replace").strip(),
        )
        raise FortuneExecutionError()

    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FortuneDecodeError() from exc


class FortuneInvoker:
    """``get_fortune`` bound to a command and timeout."""

    def __init__(self, command: str = "fortune", timeout: Optional[float] = None) -> None:
        self.command = command
        self.timeout = timeout

    async def __call__(self, category: str = "") -> str:
        return await get_fortune(category, command=self.command, timeout=self.timeout)
