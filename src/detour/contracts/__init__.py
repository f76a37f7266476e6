"""Shared contracts: redirect decisions, rejection errors, client constants.

This is a leaf package. It must not import from detour.core or
detour.clients.
"""

from detour.contracts.enums import RejectionCategory
from detour.contracts.errors import RedirectRejected
from detour.contracts.http import (
    CONTENT_TYPE_HEADER,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_USER_AGENT,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    PLAIN_TEXT_CONTENT_TYPE,
    USER_AGENT_HEADER,
    XML_CONTENT_TYPE,
    UploadFile,
)
from detour.contracts.results import RedirectDecision

__all__ = [
    "CONTENT_TYPE_HEADER",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_USER_AGENT",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "PLAIN_TEXT_CONTENT_TYPE",
    "USER_AGENT_HEADER",
    "XML_CONTENT_TYPE",
    "RedirectDecision",
    "RedirectRejected",
    "RejectionCategory",
    "UploadFile",
]
