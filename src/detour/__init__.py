"""
Detour: redirect-following policies for httpx clients.

A policy decides, from the candidate redirect request and the chain of
requests already issued, whether a redirect may be followed.
"""

from detour.clients.http import RedirectPolicyClient
from detour.contracts import (
    RedirectDecision,
    RedirectRejected,
    RejectionCategory,
    UploadFile,
)
from detour.core.policies import (
    RedirectPolicy,
    allowed_domain_redirect_policy,
    allowed_host_redirect_policy,
    chain_redirect_policies,
    max_redirect_policy,
    no_redirect_policy,
    same_domain_redirect_policy,
    same_host_redirect_policy,
)

__version__ = "0.1.0"

__all__ = [
    "RedirectDecision",
    "RedirectPolicy",
    "RedirectPolicyClient",
    "RedirectRejected",
    "RejectionCategory",
    "UploadFile",
    "allowed_domain_redirect_policy",
    "allowed_host_redirect_policy",
    "chain_redirect_policies",
    "max_redirect_policy",
    "no_redirect_policy",
    "same_domain_redirect_policy",
    "same_host_redirect_policy",
]
