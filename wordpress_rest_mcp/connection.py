"""Connection diagnostics for a configured WordPress site."""

from __future__ import annotations

import time

from .auth import AuthenticationManager
from .client import parse_as
from .config import logger
from .errors import WordPressError
from .http_client import WordPressHttpClient
from .models import (
    ConnectionDetails,
    ConnectionReport,
    ConnectionTestResult,
    Functionality,
    WordPressUser,
)

# Route names reported in connection details
MAX_REPORTED_ENDPOINTS = 10

# (collection, label, capability that grants write access)
_PROBES: dict[Functionality, tuple[str, str, str | None]] = {
    Functionality.POSTS: ("/posts", "Posts", "edit_posts"),
    Functionality.MEDIA: ("/media", "Media", "upload_files"),
    Functionality.CATEGORIES: ("/categories", "Categories", None),
    Functionality.USERS: ("/users/me", "Users", None),
}

_WRITE_LABELS = {"edit_posts": "write", "upload_files": "upload"}


class ConnectionTester:
    """Runs diagnostic calls and turns their outcomes into results.

    Probe failures are reported in the returned ConnectionTestResult rather
    than raised.
    """

    def __init__(
        self, auth_manager: AuthenticationManager, http_client: WordPressHttpClient
    ) -> None:
        self._auth = auth_manager
        self._http = http_client

    def _elapsed_ms(self, start: float) -> int:
        return int((time.monotonic() - start) * 1000)

    async def test_connection(self) -> ConnectionTestResult:
        """Full test: security, credentials, reachability, identity, site info.

        Returns the first failing step's result, with the elapsed time.
        """
        start = time.monotonic()

        security = self._auth.validate_security()
        if not security.is_secure:
            result = self._auth.create_connection_test_result(
                False, f"Security validation failed: {', '.join(security.issues)}"
            )
            return result.model_copy(update={"duration_ms": self._elapsed_ms(start)})

        try:
            self._auth.authenticate()
        except WordPressError as e:
            result = self._auth.create_connection_test_result(False, e.message, e)
            return result.model_copy(update={"duration_ms": self._elapsed_ms(start)})

        for step in (self._test_basic_connectivity, self._test_api_access):
            result = await step()
            if not result.success:
                return result.model_copy(update={"duration_ms": self._elapsed_ms(start)})

        details = await self._site_information()
        details.security_warnings = security.warnings
        duration = self._elapsed_ms(start)
        logger.info("Connection test passed for %s in %sms", self._auth.site_url, duration)
        return ConnectionTestResult(
            success=True,
            message=f"Successfully connected to WordPress site in {duration}ms",
            details=details,
            duration_ms=duration,
        )

    async def _test_basic_connectivity(self) -> ConnectionTestResult:
        try:
            response = await self._http.get("/")
        except WordPressError as e:
            return self._auth.create_connection_test_result(
                False, "Failed to connect to WordPress site", e
            )
        if response.status != 200:
            return self._auth.create_connection_test_result(
                False, "WordPress site is not responding correctly"
            )
        return self._auth.create_connection_test_result(
            True, "Basic connectivity test passed"
        )

    async def _test_api_access(self) -> ConnectionTestResult:
        try:
            user = await self._current_user()
        except WordPressError as e:
            return self._auth.create_connection_test_result(
                False, "WordPress REST API access failed", e
            )
        if not user.capabilities:
            return self._auth.create_connection_test_result(
                False, "User has insufficient permissions for API access"
            )
        return self._auth.create_connection_test_result(
            True, "WordPress REST API access test passed"
        )

    async def _current_user(self) -> WordPressUser:
        response = await self._http.get("/users/me", params={"context": "edit"})
        return parse_as(WordPressUser, response.data, "user")

    async def _site_information(self) -> ConnectionDetails:
        """Best-effort site metadata; missing pieces are left empty."""
        details = ConnectionDetails(site_url=self._auth.site_url, api_endpoints=[])
        try:
            info = await self._http.get_connection_info()
        except WordPressError as e:
            logger.info("Site information unavailable: %s", e.message)
            return details

        site = info["site"] if isinstance(info["site"], dict) else {}
        details.wordpress_version = site.get("wordpress_version")
        try:
            details.user_info = parse_as(WordPressUser, info["user"], "user").summary()
        except WordPressError as e:
            logger.info("User information unavailable: %s", e.message)
        details.api_endpoints = info["api_endpoints"][:MAX_REPORTED_ENDPOINTS]
        return details

    async def _capability_status(self, capability: str) -> str:
        try:
            user = await self._current_user()
        except WordPressError:
            return "UNKNOWN"
        return "OK" if user.can(capability) else "LIMITED"

    async def test_functionality(self, functionality: Functionality | str) -> ConnectionTestResult:
        """Probe read access to one area and, where relevant, write access.

        Args:
            functionality: One of posts, media, categories, users.
        """
        try:
            kind = Functionality(functionality)
        except ValueError:
            return self._auth.create_connection_test_result(
                False, f"Unknown functionality: {functionality}"
            )

        path, label, capability = _PROBES[kind]
        params = None if kind is Functionality.USERS else {"per_page": 1}
        try:
            response = await self._http.get(path, params=params)
        except WordPressError as e:
            return self._auth.create_connection_test_result(
                False, f"{label} functionality test failed", e
            )

        can_read = response.status == 200
        status = "OK" if can_read else "FAILED"
        if capability is None:
            return self._auth.create_connection_test_result(
                can_read, f"{label} access: {status}"
            )

        message = f"{label} read access: {status}"
        write_status = await self._capability_status(capability)
        message += f", {label} {_WRITE_LABELS[capability]} access: {write_status}"
        return self._auth.create_connection_test_result(can_read, message)

    async def get_connection_report(self) -> ConnectionReport:
        """Connectivity, API access, every functionality probe and security."""
        if not self._auth.is_authenticated():
            self._auth.authenticate()
        basic = await self._test_basic_connectivity()
        api = await self._test_api_access()
        functionality_tests = {
            kind.value: await self.test_functionality(kind) for kind in Functionality
        }
        return ConnectionReport(
            basic_connectivity=basic,
            api_access=api,
            functionality_tests=functionality_tests,
            security_check=self._auth.validate_security(),
        )

    async def quick_test(self) -> ConnectionTestResult:
        """Credentials plus one authenticated call; no per-area probes."""
        start = time.monotonic()
        try:
            self._auth.authenticate()
            ok = await self._http.test_connection()
        except WordPressError as e:
            result = self._auth.create_connection_test_result(False, e.message, e)
        else:
            result = self._auth.create_connection_test_result(
                ok, "Quick connection test passed" if ok else "Quick connection test failed"
            )
        return result.model_copy(update={"duration_ms": self._elapsed_ms(start)})
