from dataclasses import dataclass, field
from enum import Enum


class RunStage(str, Enum):
    IDLE = "IDLE"
    FETCHING = "FETCHING"
    NORMALIZING = "NORMALIZING"
    GENERATING = "GENERATING"
    WRITING = "WRITING"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass(frozen=True)
class StageResult:
    stage: RunStage
    ok: bool
    message: str
    artifacts: list[str] = field(default_factory=list)
