"""
Process execution - the single seam through which external system tools run.

Services depend on CommandExecutor instead of spawning processes themselves,
so tests can substitute a recording fake.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import CommandExecutionError


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successfully executed command."""

    returncode: int
    stdout: str
    stderr: str


class CommandExecutor:
    """
    Runs external commands via asyncio subprocesses.

    `input` is written to the process' stdin and `env` is merged on top of the
    current environment. Neither is ever logged, so they are the channels for
    credential material.
    """

    async def run(
        self,
        command: str,
        *args: str,
        input: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> CommandResult:
        command_line = " ".join([command, *args])
        logging.debug(f"Running command: {command_line}")

        process_env = None
        if env:
            process_env = {**os.environ, **env}

        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=process_env,
        )
        stdout, stderr = await process.communicate(
            input.encode() if input is not None else None
        )

        result = CommandResult(
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace") if stdout else "",
            stderr=stderr.decode(errors="replace") if stderr else "",
        )

        if result.returncode != 0:
            raise CommandExecutionError(command_line, result.returncode, result.stderr)

        return result
