"""Exceptions raised by the case engine.

Lookup failures and unresolvable dialogue contexts are *not* exceptions: the
engine logs them and returns a sentinel. Only problems that make the game
unplayable (a broken catalog, bad configuration) are raised.
"""


class CaseError(Exception):
    """Base class for case engine errors."""


class CatalogError(CaseError):
    """The content catalog is missing or internally inconsistent."""

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)


class SettingsError(CaseError):
    """An environment setting could not be parsed."""
