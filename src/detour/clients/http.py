# src/detour/clients/http.py
"""HTTP client that follows redirects under a redirect policy.

httpx does all transport work and builds each redirect request itself
(method rewriting, auth stripping, cookie refresh). This client turns off
httpx's own redirect following and evaluates the configured policy on
every hop before sending it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import ExitStack
from types import TracebackType
from typing import Any

import httpx

from detour.contracts import (
    CONTENT_TYPE_HEADER,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_USER_AGENT,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    PLAIN_TEXT_CONTENT_TYPE,
    USER_AGENT_HEADER,
    XML_CONTENT_TYPE,
    RedirectRejected,
    UploadFile,
)
from detour.core.config import ClientSettings, build_redirect_policy
from detour.core.logging import get_logger
from detour.core.policies import RedirectPolicy, max_redirect_policy

logger = get_logger(__name__)


class RedirectPolicyClient:
    """httpx wrapper that applies a RedirectPolicy to each redirect hop.

    The policy sees the candidate request httpx would send next and the
    chain of requests already sent, oldest first. A rejection aborts the
    chain with RedirectRejected; the rejected target is never requested.

    Example:
        client = RedirectPolicyClient(
            policy=allowed_host_redirect_policy("example.com", "cdn.example.com"),
            base_url="https://example.com",
        )

        response = client.get("/download")
        print(response.status_code, [str(r.url) for r in response.history])

    Thread Safety:
        Policies are immutable and httpx.Client is thread-safe, so one
        client may serve many concurrent requests.
    """

    def __init__(
        self,
        *,
        policy: RedirectPolicy | None = None,
        timeout: float = 30.0,
        base_url: str | None = None,
        headers: Mapping[str, str] | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            policy: Redirect policy (default: max_redirect_policy(10))
            timeout: Request timeout in seconds, applied to every hop
            base_url: Optional base URL for relative request paths
            headers: Default headers for all requests
            user_agent: User-Agent header value
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._policy = policy if policy is not None else max_redirect_policy(DEFAULT_MAX_REDIRECTS)
        default_headers = {USER_AGENT_HEADER: user_agent}
        default_headers.update(headers or {})
        # follow_redirects=False: redirects are followed manually so the
        # policy runs before each hop.
        self._client = httpx.Client(
            timeout=timeout,
            base_url=base_url or "",
            headers=default_headers,
            follow_redirects=False,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> RedirectPolicyClient:
        """Build a client from a ClientSettings block."""
        return cls(
            policy=build_redirect_policy(settings.redirect_policies),
            timeout=settings.timeout,
            base_url=settings.base_url,
            headers=settings.headers,
            user_agent=settings.user_agent,
            transport=transport,
        )

    @property
    def policy(self) -> RedirectPolicy:
        return self._policy

    def close(self) -> None:
        """Close the underlying httpx client and release connections."""
        self._client.close()

    def __enter__(self) -> RedirectPolicyClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, following redirects the policy allows.

        Args:
            method: HTTP method
            url: Absolute URL, or path relative to base_url
            **kwargs: Passed through to httpx.Client.request

        Returns:
            Final non-redirect response; followed redirect responses are
            in response.history

        Raises:
            TypeError: If follow_redirects is passed
            RedirectRejected: If the policy refuses a redirect hop
            httpx.HTTPError: For network/HTTP errors
        """
        if "follow_redirects" in kwargs:
            raise TypeError(
                "follow_redirects is not accepted; redirects are governed by the client's policy "
                "(use no_redirect_policy() to disable them)"
            )
        response = self._client.request(method, url, **kwargs)
        return self._follow_redirects(response)

    def _follow_redirects(self, response: httpx.Response) -> httpx.Response:
        """Follow redirect hops until a non-redirect response or a rejection.

        httpx sets response.next_request on redirect responses when it is
        not following redirects itself; that is the candidate for each hop.
        """
        chain: list[httpx.Request] = [response.request]
        history: list[httpx.Response] = []

        while response.next_request is not None:
            candidate = response.next_request
            decision = self._policy.evaluate(candidate, chain)

            if not decision.allowed:
                response.close()
                error = RedirectRejected.from_decision(
                    decision,
                    url=str(candidate.url),
                    chain=[str(request.url) for request in chain],
                )
                logger.warning(
                    "redirect_rejected",
                    url=error.url,
                    redirect_from=str(response.url),
                    category=error.category.value,
                    reason=error.reason,
                    hops=len(history),
                )
                raise error

            logger.debug(
                "redirect_followed",
                url=str(candidate.url),
                redirect_from=str(response.url),
                status_code=response.status_code,
                hop_number=len(history) + 1,
            )
            response.close()
            history.append(response)
            response = self._client.send(candidate)
            chain.append(candidate)

        response.history = history
        return response

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("HEAD", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", url, **kwargs)

    def post(
        self,
        url: str,
        *,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        text: str | None = None,
        xml: str | None = None,
        files: Sequence[UploadFile] | None = None,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a POST request with one kind of body.

        Args:
            url: URL path (appended to base_url if configured)
            json: JSON body, sent as application/json; charset=utf-8
            data: Form fields; url-encoded, or multipart alongside files
            text: Plain text body, sent as text/plain; charset=utf-8
            xml: XML document, sent as text/xml; charset=utf-8
            files: Files to upload as multipart parts
            headers: Additional headers (an explicit Content-Type wins)
            **kwargs: Passed through to httpx.Client.request

        Returns:
            Final response after any allowed redirects

        Raises:
            ValueError: If more than one body kind is given
            RedirectRejected: If the policy refuses a redirect hop
            httpx.HTTPError: For network/HTTP errors
        """
        bodies = [json is not None, text is not None, xml is not None, bool(files) or data is not None]
        if sum(bodies) > 1:
            raise ValueError("post() accepts only one of json, text, xml or data/files")

        request_headers = httpx.Headers(headers)
        with ExitStack() as stack:
            if files:
                kwargs["files"] = [upload.as_httpx_file(stack) for upload in files]
                if data is not None:
                    kwargs["data"] = data
            elif data is not None:
                kwargs["data"] = data
                request_headers.setdefault(CONTENT_TYPE_HEADER, FORM_CONTENT_TYPE)

            if json is not None:
                kwargs["json"] = json
                request_headers.setdefault(CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE)
            elif text is not None:
                kwargs["content"] = text.encode("utf-8")
                request_headers.setdefault(CONTENT_TYPE_HEADER, PLAIN_TEXT_CONTENT_TYPE)
            elif xml is not None:
                kwargs["content"] = xml.encode("utf-8")
                request_headers.setdefault(CONTENT_TYPE_HEADER, XML_CONTENT_TYPE)

            return self.request("POST", url, headers=request_headers, **kwargs)
