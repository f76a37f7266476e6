"""HTTP clients that consult a redirect policy before every redirect hop.

Example:
    from detour.clients import RedirectPolicyClient
    from detour.core.policies import same_domain_redirect_policy

    with RedirectPolicyClient(policy=same_domain_redirect_policy()) as client:
        response = client.get("https://www.example.com/start")
        print(len(response.history), "redirects followed")
"""

from detour.clients.http import RedirectPolicyClient

__all__ = [
    "RedirectPolicyClient",
]
