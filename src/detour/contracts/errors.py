"""Errors raised when a redirect chain is aborted."""

from __future__ import annotations

from collections.abc import Sequence

from detour.contracts.enums import RejectionCategory
from detour.contracts.results import RedirectDecision


class RedirectRejected(Exception):
    """A redirect policy refused the next hop of a redirect chain.

    Policies themselves never raise this. They return a RedirectDecision,
    and the client that drives the chain raises RedirectRejected as the
    terminal error for the request.

    Attributes:
        reason: Human-readable rejection reason from the policy
        category: Which policy rule rejected the redirect
        url: The redirect target that was refused (if known)
        chain: URLs already requested in this chain, oldest first
    """

    def __init__(
        self,
        reason: str,
        *,
        category: RejectionCategory,
        url: str | None = None,
        chain: Sequence[str] = (),
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.category = category
        self.url = url
        self.chain = tuple(chain)

    @classmethod
    def from_decision(
        cls,
        decision: RedirectDecision,
        *,
        url: str | None = None,
        chain: Sequence[str] = (),
    ) -> RedirectRejected:
        """Build the error for a rejected decision.

        Raises:
            ValueError: If the decision allowed the redirect
        """
        if decision.allowed or decision.category is None or decision.reason is None:
            raise ValueError(f"Cannot raise RedirectRejected for a non-rejecting decision: {decision!r}")
        return cls(decision.reason, category=decision.category, url=url, chain=chain)

    def __repr__(self) -> str:
        return f"RedirectRejected({self.reason!r}, category={self.category.value!r}, url={self.url!r})"
