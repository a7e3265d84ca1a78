"""Exceptions that abort a site build."""

from typing import List, Optional, Sequence


class SiteBuildError(Exception):
    """Base class for fatal build errors."""


class CommandFailedError(SiteBuildError):
    def __init__(self, result, message: Optional[str] = None):
        self.result = result
        super().__init__(message or f"Command failed with exit code {result.returncode}: {result.command} (cwd: {result.cwd})")


class BuildOutputNotFoundError(SiteBuildError):
    def __init__(self, project: str, candidates: Sequence[str]):
        self.project = project
        self.candidates = list(candidates)
        checked = ", ".join(f"{project}/{c}" for c in self.candidates)
        super().__init__(f"{project} build output not found (checked {checked})")


class StepFailedError(SiteBuildError):
    """A fatal step raised; ``results`` holds the outcomes recorded before it."""

    def __init__(self, step_name: str, error: BaseException, results: Optional[List] = None):
        self.step_name = step_name
        self.error = error
        self.results = list(results or [])
        super().__init__(f"Step '{step_name}' failed: {error}")
