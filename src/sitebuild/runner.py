import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from sitebuild.errors import CommandFailedError


@dataclass(frozen=True)
class CommandResult:
    command: str
    cwd: Path
    returncode: Optional[int]

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """
    Runs shell commands synchronously with the console as their stdio.
    Nothing is captured: the child's output goes straight to the terminal.
    """

    def __init__(self, default_cwd: Path):
        self.default_cwd = Path(default_cwd)

    def run(self, command: str, cwd: Optional[Union[str, Path]] = None) -> CommandResult:
        """
        Run a command and report how it exited.
        Args:
            command: Shell command line
            cwd: Working directory, defaults to the project root
        Returns:
            CommandResult with the exit code
        Raises:
            CommandFailedError: if the working directory does not exist
        """
        workdir = Path(cwd) if cwd else self.default_cwd
        logger.info(f"> {command} (cwd: {workdir})")

        if not workdir.is_dir():
            result = CommandResult(command, workdir, None)
            raise CommandFailedError(result, f"Working directory not found for '{command}': {workdir}")

        completed = subprocess.run(command, shell=True, cwd=str(workdir), check=False)
        result = CommandResult(command, workdir, completed.returncode)
        if not result.ok:
            logger.debug(f"Command exited with code {result.returncode}: {command}")
        return result

    def check(self, command: str, cwd: Optional[Union[str, Path]] = None) -> CommandResult:
        """Run a command and raise CommandFailedError on a non-zero exit."""
        result = self.run(command, cwd)
        if not result.ok:
            raise CommandFailedError(result)
        return result
