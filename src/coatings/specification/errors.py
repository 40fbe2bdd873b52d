"""Specification validation error."""

from __future__ import annotations

from coatings.model.diagnostic import Diagnostic


class ValidationError(Exception):
    """Raised when a specification produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )

    @property
    def first(self) -> Diagnostic | None:
        errors = [d for d in self.diagnostics if d.is_error]
        return errors[0] if errors else None
