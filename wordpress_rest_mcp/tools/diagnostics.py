"""Connection diagnostic tools."""

from __future__ import annotations

from typing import Literal

from mcp.server.fastmcp import Context

from ..errors import troubleshooting_guide
from ..models import ConnectionReport, ConnectionTestResult, Functionality
from ..session import get_service
from ..utils import handle_tool_exception


def _mark(success: bool) -> str:
    return "PASS" if success else "FAIL"


def render_test_result(result: ConnectionTestResult) -> str:
    lines = [f"[{_mark(result.success)}] {result.message}"]
    if result.duration_ms is not None:
        lines.append(f"Duration: {result.duration_ms}ms")

    details = result.details
    if details is not None:
        lines.append(f"Site: {details.site_url}")
        if details.wordpress_version:
            lines.append(f"WordPress version: {details.wordpress_version}")
        if details.user_info:
            user = details.user_info
            roles = ", ".join(user.get("roles") or []) or "none"
            lines.append(
                f"User: {user.get('name') or user.get('username')} "
                f"(ID: {user.get('id')}, roles: {roles})"
            )
        if details.api_endpoints:
            lines.append(f"API routes: {', '.join(details.api_endpoints)}")
        if details.security_warnings:
            lines.append("Security warnings:")
            lines += [f"- {warning}" for warning in details.security_warnings]

    if result.error is not None:
        status = f" (HTTP {result.error.http_status})" if result.error.http_status else ""
        lines.append(f"Error: {result.error.code}{status}: {result.error.message}")
    return "\n".join(lines)


def render_report(report: ConnectionReport) -> str:
    lines = [
        "WordPress Connection Report",
        f"Overall: {_mark(report.success)}",
        "",
        f"Basic connectivity: {render_test_result(report.basic_connectivity)}",
        f"API access: {render_test_result(report.api_access)}",
        "",
        "Functionality:",
    ]
    for name, result in report.functionality_tests.items():
        lines.append(f"- {name}: [{_mark(result.success)}] {result.message}")

    security = report.security_check
    lines += ["", f"Security: {'secure' if security.is_secure else 'INSECURE'}"]
    lines += [f"- Issue: {issue}" for issue in security.issues]
    lines += [f"- Warning: {warning}" for warning in security.warnings]
    return "\n".join(lines)


def register_diagnostic_tools(mcp):
    """Register connection diagnostic tools with the MCP server."""

    @mcp.tool(
        name="wordpress_test_connection",
        annotations={
            "title": "Test WordPress Connection",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_test_connection(
        mode: Literal["full", "quick"] = "full",
        ctx: Context = None,
    ) -> str:
        """Test the connection and credentials for the configured WordPress site.

        Args:
            mode: full (security, connectivity, API access and site info) or
                quick (one authenticated call).

        Returns:
            str: The test outcome, with a troubleshooting guide on failure.
        """
        try:
            tester = get_service().tester
            if mode == "quick":
                result = await tester.quick_test()
            else:
                result = await tester.test_connection()
        except Exception as e:
            return handle_tool_exception(e, "test connection")

        text = render_test_result(result)
        if not result.success:
            text += "\n\n" + troubleshooting_guide(result)
        return text

    @mcp.tool(
        name="wordpress_test_functionality",
        annotations={
            "title": "Test WordPress Functionality",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_test_functionality(
        functionality: Literal["posts", "media", "categories", "users"],
        ctx: Context = None,
    ) -> str:
        """Probe read and write access to one area of the site.

        Args:
            functionality: posts, media, categories or users.

        Returns:
            str: Access status for the area.
        """
        try:
            result = await get_service().tester.test_functionality(
                Functionality(functionality)
            )
        except Exception as e:
            return handle_tool_exception(e, "test functionality")
        return render_test_result(result)

    @mcp.tool(
        name="wordpress_connection_report",
        annotations={
            "title": "WordPress Connection Report",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_connection_report(ctx: Context = None) -> str:
        """Run every diagnostic and return a combined report.

        Covers connectivity, API access, each functionality probe and the
        security policy check.
        """
        try:
            report = await get_service().tester.get_connection_report()
        except Exception as e:
            return handle_tool_exception(e, "build connection report")
        return render_report(report)
