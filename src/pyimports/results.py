"""Per-file outcomes and the exit status derived from them."""

from dataclasses import dataclass, field
from enum import IntEnum

from pyimports.errors import PyimportsError


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 2


@dataclass(frozen=True)
class FileOutcome:
    """What happened to one file, or to an argument that yielded no files."""

    path: str
    changed: bool = False
    error: PyimportsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunResult:
    outcomes: list[FileOutcome] = field(default_factory=list)

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def errors(self) -> list[PyimportsError]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def changed(self) -> list[str]:
        return [o.path for o in self.outcomes if o.changed]

    @property
    def exit_code(self) -> ExitCode:
        if all(o.ok for o in self.outcomes):
            return ExitCode.SUCCESS
        return ExitCode.ERROR
