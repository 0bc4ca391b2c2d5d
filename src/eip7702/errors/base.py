"""
Base exception class for the EIP-7702 sponsorship engine.

All engine exceptions inherit from DelegationError, which carries a
machine-readable error code and a details dictionary so callers (an HTTP
layer, a CLI, a job runner) can map failures without parsing messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DelegationError(Exception):
    """
    Base exception for all delegation and sponsorship errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "NONCE_MISMATCH").
        details: Optional dictionary with additional error context.

    Example:
        >>> raise DelegationError(
        ...     "Authorization rejected",
        ...     code="TRUST_ERROR",
        ...     details={"signer": "0x123..."}
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "DELEGATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ServiceNotInitializedError(DelegationError):
    """Raised when the engine is used without a chain client or chain id."""

    def __init__(self, missing: str) -> None:
        super().__init__(
            f"Service not properly initialized: {missing} is missing",
            code="SERVICE_NOT_INITIALIZED",
            details={"missing": missing},
        )
        self.missing = missing
