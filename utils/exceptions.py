"""UI harness failure taxonomy.

Every error carries a ``diagnostics`` dict (last observed values, current
location, ...) collected at the failure point.
"""


class HarnessError(Exception):
    """Base class for all harness failures."""

    def __init__(self, message: str, diagnostics: dict | None = None):
        super().__init__(message)
        self.message = message
        self.diagnostics = dict(diagnostics or {})

    def __str__(self):
        if not self.diagnostics:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.diagnostics.items())
        return f"{self.message} [{details}]"


class NavigationError(HarnessError, AssertionError):
    """Location after navigate() is not the page's canonical address."""


class ElementNotFound(HarnessError, AssertionError):
    """A locator key that must match exactly one element matched none (or several)."""


class TransitionTimeout(HarnessError, AssertionError):
    """The expected effect of an action was not observed in time."""


class UnexpectedState(HarnessError, AssertionError):
    """An error banner or other unexpected element is present."""


class AssertionTimeout(HarnessError, AssertionError):
    """A polling predicate never held within its bound."""

    def __init__(self, message: str, last_value=None, diagnostics: dict | None = None):
        diagnostics = dict(diagnostics or {})
        diagnostics.setdefault("last_value", last_value)
        super().__init__(message, diagnostics)
        self.last_value = last_value


class UnknownPersona(HarnessError, KeyError):
    """Persona id is not registered."""

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return HarnessError.__str__(self)


class ComparisonFailure(HarnessError, AssertionError):
    """Cross-persona field policy violated."""
