"""
Synchronous command execution for PaneShell.

Runs a fully resolved argv without a shell, merges stdout and stderr into
one capture and reports failures as a short description instead of
raising. The call blocks until the child exits.
"""

import signal
import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

logger = logging.getLogger('PaneShell.Runner')


@dataclass(frozen=True)
class RunResult:
    """Outcome of one command run."""
    argv: Tuple[str, ...]
    output: str = ""
    error: Optional[str] = None
    returncode: Optional[int] = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None

    def format_log_entry(self) -> str:
        """Text appended to the output log for this run."""
        header = f"Running command: {' '.join(self.argv)}\n"
        if self.error is not None:
            return header + f"Error: {self.error}\n"
        return header + self.output


def describe_returncode(returncode: int) -> str:
    if returncode < 0:
        try:
            return f"signal: {signal.Signals(-returncode).name}"
        except ValueError:
            return f"signal: {-returncode}"
    return f"exit status {returncode}"


class CommandRunner:
    """Runs commands as child processes and captures their combined output."""

    def __init__(self, cwd: Optional[str] = None, encoding: str = 'utf-8'):
        self.cwd = cwd
        self.encoding = encoding

    def run(self, argv: Sequence[str]) -> Optional[RunResult]:
        """
        Run a command and wait for it to finish.

        Args:
            argv: Executable followed by literal arguments

        Returns:
            RunResult, or None when argv is empty (nothing is run)
        """
        argv = tuple(argv)
        if not argv:
            logger.debug("Ignoring empty command")
            return None

        logger.info(f"Running {argv!r}")
        start_time = time.time()
        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                cwd=self.cwd,
            )
        except (OSError, ValueError) as e:
            # ValueError: argv the OS cannot accept, e.g. an embedded NUL byte
            duration = time.time() - start_time
            reason = getattr(e, 'strerror', None) or str(e)
            logger.warning(f"Could not start {argv[0]!r}: {reason}")
            return RunResult(argv=argv, error=f'exec: "{argv[0]}": {reason}', duration=duration)

        duration = time.time() - start_time
        output = completed.stdout.decode(self.encoding, errors='replace')
        logger.info(f"{argv[0]!r} exited with {completed.returncode} after {duration:.3f}s")

        if completed.returncode != 0:
            return RunResult(
                argv=argv,
                output=output,
                error=describe_returncode(completed.returncode),
                returncode=completed.returncode,
                duration=duration,
            )
        return RunResult(argv=argv, output=output, returncode=0, duration=duration)
