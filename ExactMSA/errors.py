"""
Exceptions for the ExactMSA package.

Every error carries a message, an optional suggestion and optional context,
and renders all three when printed.
"""

from __future__ import annotations
from typing import Optional


class MSAError(Exception):
    """Base exception for all ExactMSA errors.

    Parameters:
    -----------
    message : str
        What went wrong
    suggestion : str, optional
        What the caller can do about it
    context : str, optional
        Extra detail (input sizes, offending values)
    """

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context
        super().__init__(self.formatted())

    def formatted(self) -> str:
        msg = f"[ERROR] {self.message}"
        if self.context:
            msg += f"\n  Context: {self.context}"
        if self.suggestion:
            msg += f"\n  Suggestion: {self.suggestion}"
        return msg

    def __str__(self) -> str:
        return self.formatted()


class InvalidInput(MSAError, ValueError):
    """Input rejected before any computation started.

    Raised for an empty sequence list, a memo table that would exceed the
    configured cell bound, invalid options or an invalid scoring scheme.
    """


class LogicViolation(MSAError, RuntimeError):
    """Internal invariant broken (write-once table entry, cursor out of range).

    Never expected to surface; treat as a programming error.
    """


class BudgetExceeded(MSAError, RuntimeError):
    """Search stopped because the evaluation or time budget ran out."""

    def __init__(self, message: str, evaluated: int = 0, elapsed: float = 0.0,
                 suggestion: Optional[str] = None):
        self.evaluated = evaluated
        self.elapsed = elapsed
        super().__init__(
            message,
            suggestion=suggestion or "Use fewer/shorter sequences or raise the budget",
            context=f"{evaluated} subproblems evaluated in {elapsed:.3f}s",
        )
