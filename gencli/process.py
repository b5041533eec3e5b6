"""Subprocess execution for external AI CLI tools."""

import logging
import subprocess
from typing import Optional, Sequence

from .exceptions import CommandNotFoundError, ProcessFailureError

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Runs one external command line and returns its standard output.

    Providers receive a runner instead of calling subprocess directly so the
    process boundary can be replaced in tests.
    """

    def run(
        self,
        args: Sequence[str],
        timeout: float,
        input_text: Optional[str] = None,
    ) -> str:
        """Run ``args`` and return stdout as text.

        Standard error is discarded. The command is never run through a shell.
        Output is decoded as UTF-8 with undecodable bytes replaced.

        Raises:
            CommandNotFoundError: If the executable is not on PATH
            ProcessFailureError: On a non-zero exit status or a timeout
        """
        cmd_args = list(args)
        logger.debug("Running %s (timeout %ss)", cmd_args[0] if cmd_args else "", timeout)

        try:
            result = subprocess.run(
                cmd_args,
                input=input_text,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                shell=False,
            )
        except FileNotFoundError:
            raise CommandNotFoundError(cmd_args[0] if cmd_args else "unknown")
        except subprocess.TimeoutExpired:
            raise ProcessFailureError(
                f"Command timed out after {timeout} seconds: {cmd_args[0]}"
            )

        if result.returncode != 0:
            raise ProcessFailureError(
                f"Command failed with exit code {result.returncode}: {cmd_args[0]}",
                returncode=result.returncode,
            )

        return result.stdout or ""
