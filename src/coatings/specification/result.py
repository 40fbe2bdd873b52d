from __future__ import annotations

from dataclasses import dataclass, field

from coatings.model.application import ApplicationSpecification
from coatings.model.diagnostic import Diagnostic


@dataclass
class ParseResult:
    """Applications parsed from a specification page, plus what was wrong with it."""

    applications: dict[str, ApplicationSpecification] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    # Base templates that do not exist yet; creating one changes the result.
    pending_bases: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    @property
    def is_good(self) -> bool:
        return not self.diagnostics
