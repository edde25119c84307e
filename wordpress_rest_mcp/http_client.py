"""Authenticated HTTP client for the WordPress REST API.

Every request passes rate-limit admission, gets the Basic Authorization
header attached, and has its failure classified into the AuthErrorType
taxonomy. A 401 is retried exactly once after re-authenticating.
"""

from __future__ import annotations

import asyncio
import ssl
from dataclasses import dataclass
from typing import Any

import httpx

from .auth import AuthenticationManager
from .config import USER_AGENT, logger
from .errors import AuthErrorType, WordPressError
from .rate_limiter import RateLimiter


@dataclass(frozen=True)
class ApiResponse:
    """Parsed JSON body plus the pagination headers WordPress sends."""

    data: Any
    status: int
    total: int | None = None
    total_pages: int | None = None


def _int_header(response: httpx.Response, name: str) -> int | None:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """WordPress errors look like {"code", "message", "data": {"status", "params"}}."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _is_certificate_error(exc: BaseException) -> bool:
    current: BaseException | None = exc
    for _ in range(5):
        if current is None:
            break
        if isinstance(current, ssl.SSLError):
            return True
        current = current.__cause__ or current.__context__
    text = str(exc).lower()
    return "certificate_verify_failed" in text or "certificate verify failed" in text


def build_ssl_context(verify_ssl: bool) -> ssl.SSLContext | bool:
    """TLS 1.2+ with certificate checks, or no verification when disabled."""
    if not verify_ssl:
        return False
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


class WordPressHttpClient:
    """httpx wrapper bound to one AuthenticationManager.

    Args:
        auth_manager: Source of configuration and credentials.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        rate_limiter: Overrides the limiter built from the configuration.
    """

    def __init__(
        self,
        auth_manager: AuthenticationManager,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._auth = auth_manager
        config = auth_manager.config

        if rate_limiter is None and config.rate_limit is not None:
            rate_limiter = RateLimiter(config.rate_limit)
        self._rate_limiter = rate_limiter

        if not config.verify_ssl:
            logger.warning(
                "SSL certificate verification is disabled for %s", config.site_url
            )

        self._client = httpx.AsyncClient(
            base_url=auth_manager.api_base_url,
            timeout=config.timeout_seconds,
            verify=build_ssl_context(config.verify_ssl),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            follow_redirects=True,
            transport=transport,
        )

    @property
    def auth_manager(self) -> AuthenticationManager:
        return self._auth

    @property
    def rate_limiter(self) -> RateLimiter | None:
        return self._rate_limiter

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> WordPressHttpClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -- request pipeline ----------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request and return the parsed response.

        Raises:
            WordPressError: Classified failure; see the module docstring.
        """
        kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if json is not None:
            kwargs["json"] = json
        if content is not None:
            kwargs["content"] = content

        response = await self._send(method, path, **kwargs)

        if response.status_code == 401:
            logger.info("%s %s returned 401, re-authenticating once", method, path)
            self._auth.invalidate_auth()
            try:
                self._auth.authenticate()
            except WordPressError as e:
                raise WordPressError(
                    AuthErrorType.INVALID_CREDENTIALS,
                    "Authentication failed. Please check your username and "
                    "application password.",
                    401,
                ) from e
            response = await self._send(method, path, **kwargs)
            if response.status_code == 401:
                raise WordPressError(
                    AuthErrorType.UNAUTHORIZED,
                    "Invalid credentials or expired authentication",
                    401,
                    code=_error_body(response).get("code"),
                )

        if response.is_error:
            raise self._classify_response(response)

        return self._to_api_response(response)

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if self._rate_limiter is not None:
            self._rate_limiter.check_limit()

        if not self._auth.is_authenticated():
            self._auth.authenticate()

        headers = {"Authorization": self._auth.get_authorization_header()}
        headers.update(kwargs.pop("headers", None) or {})

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise WordPressError(
                AuthErrorType.TIMEOUT, "Request timed out while connecting to WordPress"
            ) from e
        except httpx.ConnectError as e:
            logger.debug("Connect error: %s", self._auth.sanitize_error_message(e))
            if _is_certificate_error(e):
                raise WordPressError(
                    AuthErrorType.SSL_ERROR,
                    "SSL certificate error. Check your WordPress site's SSL configuration.",
                ) from e
            raise WordPressError(
                AuthErrorType.NETWORK_ERROR,
                f"Cannot connect to WordPress site: {self._auth.site_url}",
            ) from e
        except httpx.HTTPError as e:
            raise WordPressError(
                AuthErrorType.UNKNOWN_ERROR, self._auth.sanitize_error_message(e)
            ) from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    def _classify_response(self, response: httpx.Response) -> WordPressError:
        status = response.status_code
        body = _error_body(response)
        wp_message = body.get("message")
        wp_code = body.get("code")
        data = body.get("data")
        params = data.get("params") if isinstance(data, dict) else None
        sanitize = self._auth.sanitize_error_message

        if status == 403:
            return WordPressError(
                AuthErrorType.FORBIDDEN,
                sanitize(wp_message or "Access forbidden. Check user permissions."),
                status,
                code=wp_code,
            )
        if status == 404:
            return WordPressError(
                AuthErrorType.NOT_FOUND,
                "Resource not found. The requested post, page, or endpoint does not exist.",
                status,
                code=wp_code,
            )
        if status == 429:
            return WordPressError(
                AuthErrorType.RATE_LIMITED,
                "Too many requests. Rate limit exceeded by WordPress server.",
                status,
            )
        if status >= 500:
            return WordPressError(
                AuthErrorType.NETWORK_ERROR,
                sanitize(
                    f"WordPress server error ({status}): "
                    f"{wp_message or 'Internal server error'}"
                ),
                status,
                code=wp_code,
            )
        return WordPressError(
            AuthErrorType.UNKNOWN_ERROR,
            sanitize(f"WordPress API error ({status}): {wp_message or 'Bad request'}"),
            status,
            code=wp_code,
            params=params,
        )

    @staticmethod
    def _to_api_response(response: httpx.Response) -> ApiResponse:
        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError as e:
                raise WordPressError(
                    AuthErrorType.UNKNOWN_ERROR,
                    "WordPress returned a response that is not JSON. "
                    "Check that the REST API is enabled.",
                    response.status_code,
                    code="invalid_response",
                ) from e
        return ApiResponse(
            data=data,
            status=response.status_code,
            total=_int_header(response, "x-wp-total"),
            total_pages=_int_header(response, "x-wp-totalpages"),
        )

    # -- verbs ---------------------------------------------------------------

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ApiResponse:
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> ApiResponse:
        return await self.request("POST", path, json=data, params=params)

    async def put(self, path: str, data: Any = None) -> ApiResponse:
        return await self.request("PUT", path, json=data)

    async def patch(self, path: str, data: Any = None) -> ApiResponse:
        return await self.request("PATCH", path, json=data)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> ApiResponse:
        return await self.request("DELETE", path, params=params)

    # -- diagnostics ---------------------------------------------------------

    async def test_connection(self) -> bool:
        """Authenticated round trip to /users/me."""
        response = await self.get("/users/me")
        return response.status == 200

    async def get_connection_info(self) -> dict[str, Any]:
        """Site settings, the current user and the wp/v2 route names."""
        settings, user = await asyncio.gather(
            self.get("/settings"),
            self.get("/users/me", params={"context": "edit"}),
        )
        root = await self.get("/")
        routes = root.data.get("routes", {}) if isinstance(root.data, dict) else {}
        return {
            "site": settings.data,
            "user": user.data,
            "api_endpoints": list(routes),
        }
