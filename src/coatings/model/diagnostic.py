"""Diagnostic model: structured findings about an applications specification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class ErrorKind(StrEnum):
    """What went wrong, independent of where."""

    INVALID_DATA_TYPE = "invalid-data-type"
    MISSING_DATA = "missing-data"
    INVALID_BASE = "invalid-base"
    INVALID_COATING = "invalid-coating"
    INVALID_VARIABLE_NAME = "invalid-variable-name"
    INVALID_VARIABLE_VALUE = "invalid-variable-value"
    INVALID_PRELOAD_HREF = "invalid-preload-href"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about the applications specification.

    Attributes:
        rule: Identifier for the rule that produced this diagnostic.
        severity: How serious the issue is.
        kind: The error category.
        message: Human-readable description of the problem.
        path: Location inside the specification, e.g. ``.Infobox.coatings[2]``.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    kind: ErrorKind
    message: str
    path: str = "."
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def to_dict(self) -> dict[str, str | None]:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
            "path": self.path,
            "fix": self.fix,
        }

    def __str__(self) -> str:
        return f"{self.severity.value} [{self.path}] {self.kind.value}: {self.message}"
