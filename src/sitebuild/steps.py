import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional


class StepStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    RECOVERED = "recovered"  # failed, logged, pipeline continued
    FAILED = "failed"


class StepSkipped(Exception):
    """Raised by a step action that had nothing to do."""


@dataclass
class StepResult:
    name: str
    status: StepStatus
    source: Optional[Path] = None
    destination: Optional[Path] = None
    error: Optional[str] = None
    elapsed: float = 0.0


@dataclass
class Step:
    """
    One unit of the build.
    A fatal step aborts the pipeline when its action raises; a non-fatal one
    is recorded as RECOVERED and the pipeline moves on.
    """

    name: str
    action: Callable[[], None]
    fatal: bool = True
    source: Optional[Path] = None
    destination: Optional[Path] = None
    description: str = ""

    def execute(self) -> StepResult:
        """Run the action; exceptions other than StepSkipped propagate."""
        started = time.monotonic()
        try:
            self.action()
        except StepSkipped as e:
            return self._result(StepStatus.SKIPPED, started, str(e) or None)
        return self._result(StepStatus.SUCCESS, started)

    def failure(self, error: BaseException, started: float) -> StepResult:
        status = StepStatus.FAILED if self.fatal else StepStatus.RECOVERED
        return self._result(status, started, str(error))

    def _result(self, status: StepStatus, started: float, error: Optional[str] = None) -> StepResult:
        return StepResult(
            name=self.name,
            status=status,
            source=self.source,
            destination=self.destination,
            error=error,
            elapsed=time.monotonic() - started,
        )
