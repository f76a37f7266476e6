"""Redirect policies: pure predicates over a redirect candidate and its chain.

A policy is consulted before each redirect hop with:
- candidate: the request the client is about to issue
- chain: requests already issued, oldest first (chain[0] is the original)

It returns a RedirectDecision. Rejection is a normal outcome and is never
raised. Every policy is a frozen dataclass holding only values captured at
construction, so a single instance can serve any number of concurrent
redirect chains without locking.

Example:
    from detour.core.policies import allowed_host_redirect_policy

    policy = allowed_host_redirect_policy("example.com", "cdn.example.com")
    decision = policy.evaluate(next_request, chain)
    if not decision.allowed:
        print(decision.reason)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from detour.contracts import RedirectDecision, RejectionCategory
from detour.core.hosts import RequestRef, extract_domain, extract_hostname, request_authority


@runtime_checkable
class RedirectPolicy(Protocol):
    """Decides whether a redirect may be followed."""

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision: ...

    def __call__(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision: ...


class _PolicyBase:
    """Makes policies callable as plain functions."""

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        raise NotImplementedError

    def __call__(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        return self.evaluate(candidate, chain)


def _hostname(ref: RequestRef) -> str:
    return extract_hostname(request_authority(ref))


def _domain(ref: RequestRef) -> str:
    return extract_domain(request_authority(ref))


@dataclass(frozen=True)
class MaxRedirectPolicy(_PolicyBase):
    """Rejects once the chain holds ``limit`` or more requests.

    limit=0 rejects every redirect. Negative limits are not validated;
    like 0, they reject every redirect.
    """

    limit: int

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        if len(chain) >= self.limit:
            return RedirectDecision.reject(
                RejectionCategory.TOO_MANY_REDIRECTS,
                f"stopped after {self.limit} redirects",
            )
        return RedirectDecision.allow()


@dataclass(frozen=True)
class NoRedirectPolicy(_PolicyBase):
    """Rejects every redirect regardless of input."""

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        return RedirectDecision.reject(RejectionCategory.REDIRECTS_DISABLED, "auto redirect is disabled")


@dataclass(frozen=True)
class SameDomainRedirectPolicy(_PolicyBase):
    """Allows redirects only within the original request's domain.

    Domains come from extract_domain(), so "www.example.com" and
    "api.example.com" match while "example.org" does not.
    """

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        if _domain(candidate) != _domain(chain[0]):
            return RedirectDecision.reject(
                RejectionCategory.DOMAIN_MISMATCH,
                "different domain name is not allowed",
            )
        return RedirectDecision.allow()


@dataclass(frozen=True)
class SameHostRedirectPolicy(_PolicyBase):
    """Allows redirects only to the original request's hostname.

    Ports are ignored. A redirect from "example.com" to "www.example.com"
    is rejected.
    """

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        if _hostname(candidate) != _hostname(chain[0]):
            return RedirectDecision.reject(
                RejectionCategory.HOST_MISMATCH,
                "different host name is not allowed",
            )
        return RedirectDecision.allow()


@dataclass(frozen=True)
class AllowedHostRedirectPolicy(_PolicyBase):
    """Allows redirects only to hostnames in a fixed allow-list."""

    hosts: frozenset[str]

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        if _hostname(candidate) not in self.hosts:
            return RedirectDecision.reject(
                RejectionCategory.HOST_NOT_ALLOWED,
                "redirect host is not allowed",
            )
        return RedirectDecision.allow()


@dataclass(frozen=True)
class AllowedDomainRedirectPolicy(_PolicyBase):
    """Allows redirects only to domains in a fixed allow-list."""

    domains: frozenset[str]

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        if _domain(candidate) not in self.domains:
            return RedirectDecision.reject(
                RejectionCategory.DOMAIN_NOT_ALLOWED,
                "redirect domain is not allowed",
            )
        return RedirectDecision.allow()


@dataclass(frozen=True)
class CompositeRedirectPolicy(_PolicyBase):
    """Evaluates policies in order; the first rejection wins."""

    policies: tuple[RedirectPolicy, ...]

    def evaluate(self, candidate: RequestRef, chain: Sequence[RequestRef]) -> RedirectDecision:
        for policy in self.policies:
            decision = policy.evaluate(candidate, chain)
            if not decision.allowed:
                return decision
        return RedirectDecision.allow()


def max_redirect_policy(limit: int) -> MaxRedirectPolicy:
    """Limit a chain to ``limit`` redirects."""
    return MaxRedirectPolicy(limit)


def no_redirect_policy() -> NoRedirectPolicy:
    """Disable redirect following entirely."""
    return NoRedirectPolicy()


def same_domain_redirect_policy() -> SameDomainRedirectPolicy:
    return SameDomainRedirectPolicy()


def same_host_redirect_policy() -> SameHostRedirectPolicy:
    """Allow a redirect only if it targets the original hostname.

    e.g. a redirect to "www.example.com" from "example.com" is not allowed.
    """
    return SameHostRedirectPolicy()


def allowed_host_redirect_policy(*hosts: str) -> AllowedHostRedirectPolicy:
    """Allow a redirect only if its hostname matches one of ``hosts``.

    Hosts are lower-cased and stripped of any port once, here.
    """
    return AllowedHostRedirectPolicy(frozenset(extract_hostname(h) for h in hosts))


def allowed_domain_redirect_policy(*hosts: str) -> AllowedDomainRedirectPolicy:
    """Allow a redirect only if its domain matches the domain of one of ``hosts``."""
    return AllowedDomainRedirectPolicy(frozenset(extract_domain(h) for h in hosts))


def chain_redirect_policies(*policies: RedirectPolicy) -> CompositeRedirectPolicy:
    """Combine policies so a redirect must satisfy all of them.

    With no policies every redirect is allowed.
    """
    return CompositeRedirectPolicy(tuple(policies))
