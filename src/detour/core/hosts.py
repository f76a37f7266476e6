"""Hostname and domain extraction shared by all redirect policies.

These helpers are deliberately simple string operations. In particular,
extract_domain() is a heuristic, NOT a public-suffix-list lookup:

    extract_domain("www.example.com")   -> "example.com"
    extract_domain("x.y.z.com")         -> "y.z.com"   (only one label dropped)
    extract_domain("foo.co.uk")         -> "co.uk"     (multi-part suffix collapses)

Known limitation: hosts under multi-part public suffixes (co.uk, com.au, ...)
compare as the same "domain". Callers needing exact matching should use
the host-based policies instead.
"""

from __future__ import annotations

from typing import TypeAlias

import httpx
import idna

# Anything a policy can read a target authority from.
RequestRef: TypeAlias = httpx.Request | str


def request_authority(ref: RequestRef) -> str:
    """Return the ``host[:port]`` authority a request reference targets.

    Args:
        ref: An httpx.Request, an absolute URL, or a bare ``host[:port]``

    Returns:
        The authority portion, without userinfo
    """
    if isinstance(ref, httpx.Request):
        return ref.url.netloc.decode("ascii")
    if "://" in ref:
        return httpx.URL(ref).netloc.decode("ascii")
    return ref


def extract_hostname(host: str) -> str:
    """Strip an optional trailing ``:port`` and lower-case the rest.

    Splits on the last colon when one appears after the first character.
    A bracketed IPv6 literal loses its brackets. No further validation of
    IPv6 syntax is attempted.

    Internationalized names are IDNA-encoded the way httpx encodes them,
    so "bücher.example" and the host of an httpx.Request for it compare
    equal ("xn--bcher-kva.example").
    """
    if host.startswith("["):
        end = host.find("]")
        if end != -1:
            return host[1:end].lower()
    if host.find(":") > 0:
        host = host.rpartition(":")[0]
    return _idna_encode(host.lower())


def _idna_encode(hostname: str) -> str:
    if hostname.isascii():
        return hostname
    try:
        return idna.encode(hostname).decode("ascii")
    except idna.IDNAError:
        # httpx refuses such hosts outright, so no request can ever match it.
        return hostname


def extract_domain(host: str) -> str:
    """Approximate the registrable domain of a host.

    Fewer than three labels: the hostname is returned unchanged.
    Otherwise the first label is dropped.
    """
    hostname = extract_hostname(host)
    labels = hostname.split(".")
    if len(labels) < 3:
        return hostname
    return ".".join(labels[1:])
