"""Rejection categories reported by redirect policies."""

from enum import StrEnum


class RejectionCategory(StrEnum):
    """Why a redirect policy refused to follow a redirect.

    Each policy reports exactly one category. Values are stable and safe
    to use as log fields.
    """

    TOO_MANY_REDIRECTS = "too_many_redirects"
    REDIRECTS_DISABLED = "redirects_disabled"
    DOMAIN_MISMATCH = "domain_mismatch"
    HOST_MISMATCH = "host_mismatch"
    HOST_NOT_ALLOWED = "host_not_allowed"
    DOMAIN_NOT_ALLOWED = "domain_not_allowed"
