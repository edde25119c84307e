"""Result types for security validation and connection diagnostics."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SecurityValidationResult(BaseModel):
    """Outcome of AuthenticationManager.validate_security()."""

    is_secure: bool
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ConnectionErrorInfo(BaseModel):
    code: str
    message: str
    http_status: int | None = None


class ConnectionDetails(BaseModel):
    site_url: str
    wordpress_version: str | None = None
    user_info: dict[str, Any] | None = None
    api_endpoints: list[str] | None = None
    security_warnings: list[str] | None = None


class ConnectionTestResult(BaseModel):
    """One diagnostic step's outcome."""

    success: bool
    message: str
    details: ConnectionDetails | None = None
    error: ConnectionErrorInfo | None = None
    duration_ms: int | None = None


class ConnectionReport(BaseModel):
    """Composite diagnostic report."""

    basic_connectivity: ConnectionTestResult
    api_access: ConnectionTestResult
    functionality_tests: dict[str, ConnectionTestResult] = Field(default_factory=dict)
    security_check: SecurityValidationResult

    @property
    def success(self) -> bool:
        return (
            self.basic_connectivity.success
            and self.api_access.success
            and all(r.success for r in self.functionality_tests.values())
        )
