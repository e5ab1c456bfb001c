from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StageStatus(str, Enum):
    SUCCESS = "success"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


@dataclass
class StageOutcome:
    stage: str
    status: StageStatus
    destination: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.SUCCESS

    @classmethod
    def success(cls, stage: str, destination: str) -> "StageOutcome":
        return cls(stage, StageStatus.SUCCESS, destination)

    @classmethod
    def recoverable(cls, stage: str, destination: str, error: BaseException) -> "StageOutcome":
        return cls(stage, StageStatus.RECOVERABLE, destination, error)

    @classmethod
    def fatal(cls, stage: str, destination: str, error: BaseException) -> "StageOutcome":
        return cls(stage, StageStatus.FATAL, destination, error)


@dataclass
class SequenceReport:
    destination: str
    outcomes: list[StageOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[StageOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def stages(self) -> list[str]:
        return [o.stage for o in self.outcomes]

    def summary(self) -> str:
        if not self.failed:
            return f"all {len(self.outcomes)} write steps succeeded"
        names = ", ".join(o.stage for o in self.failed)
        return f"{len(self.failed)} of {len(self.outcomes)} write steps failed ({names})"
