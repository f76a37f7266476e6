"""Redirect policy outcomes.

These types answer: "May this redirect be followed, and if not, why?"

IMPORTANT:
- Rejection is a normal outcome, returned as a value, never raised
- Use the allow()/reject() factories rather than the constructor
"""

from __future__ import annotations

from dataclasses import dataclass

from detour.contracts.enums import RejectionCategory


@dataclass(frozen=True, slots=True)
class RedirectDecision:
    """Result of evaluating a redirect policy.

    Invariant: allowed decisions carry neither category nor reason;
    rejected decisions carry both.
    """

    allowed: bool
    category: RejectionCategory | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.allowed and (self.category is not None or self.reason is not None):
            raise ValueError("Allowed RedirectDecision must not carry a category or reason")
        if not self.allowed and (self.category is None or not self.reason):
            raise ValueError("Rejected RedirectDecision MUST provide both category and reason")

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> RedirectDecision:
        """Create a decision permitting the redirect."""
        return _ALLOWED

    @classmethod
    def reject(cls, category: RejectionCategory, reason: str) -> RedirectDecision:
        """Create a decision refusing the redirect.

        Args:
            category: Which rule refused the redirect
            reason: Human-readable explanation, surfaced to the caller

        Returns:
            RedirectDecision with allowed=False
        """
        return cls(allowed=False, category=category, reason=reason)


_ALLOWED = RedirectDecision(allowed=True)
