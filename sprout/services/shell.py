"""File system and external process access for scaffolding."""
import asyncio
import shlex
from pathlib import Path
from typing import List, Optional, Sequence, Union

from sprout.core.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class CommandError(RuntimeError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"'{shlex.join(self.command)}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class LocalShell:
    """Reads and writes files on the local disk and runs external commands.

    In mock mode external commands are logged instead of executed; file
    operations always touch the disk.
    """

    def __init__(self, mock: bool = False):
        self.mock = mock

    def exists(self, path: PathLike) -> bool:
        """Check whether a file or directory exists."""
        return Path(path).exists()

    def read_file(self, path: PathLike, encoding: str = "utf-8") -> str:
        """Return the contents of a file. Raises OSError if it cannot be read."""
        return Path(path).read_text(encoding=encoding)

    def write_file(self, path: PathLike, content: str, encoding: str = "utf-8") -> None:
        """Create or overwrite a file."""
        logger.debug(f"Writing {path}")
        Path(path).write_text(content, encoding=encoding)

    async def run_command(self, command: Sequence[str], cwd: Optional[PathLike] = None) -> str:
        """Run an external command and return its stdout.

        Args:
            command: Program and arguments, e.g. ["git", "init"]
            cwd: Working directory for the process

        Returns:
            Decoded stdout ("" in mock mode)

        Raises:
            CommandError: If the process exits non-zero
            OSError: If the process cannot be spawned (missing binary or cwd)
        """
        args: List[str] = [str(part) for part in command]

        if self.mock:
            logger.info(f"MOCK: Would run '{shlex.join(args)}' in {cwd}")
            return ""

        logger.debug(f"Running '{shlex.join(args)}' in {cwd}")
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout_bytes, stderr_bytes = await proc.communicate()

        if proc.returncode != 0:
            stderr = stderr_bytes.decode("utf-8", errors="replace")
            logger.error(f"Command failed: {shlex.join(args)}")
            if stderr:
                logger.error(f"Error output: {stderr.strip()}")
            raise CommandError(args, proc.returncode, stderr)

        return stdout_bytes.decode("utf-8", errors="replace")
