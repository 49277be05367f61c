# showcase/core/errors.py
"""
Service-level error taxonomy and the Result wrapper returned by services.

Services never raise these; they return ``Result.failure(SomeError(...))``
and let the router decide how to render it. ``unwrap`` is the single place
where a failed Result becomes an HTTP error.
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from fastapi import HTTPException, status

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError:
    """Base failure: a human-readable message plus a status/code pair."""

    message: str

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: ClassVar[str] = "internal_error"


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class AuthenticationError(ServiceError):
    """Bad credentials. Same message for unknown account and wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_error"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class DuplicateError(ServiceError):
    """Uniqueness violation (email / username)."""

    status_code = status.HTTP_409_CONFLICT
    code = "duplicate"


class InvalidStateError(ServiceError):
    """Illegal role transition."""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_state"


class UpstreamError(ServiceError):
    """The remote image store failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "upstream_error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation: either a value or a ServiceError.

    Usage:

        result = service.signup(session, payload)
        if not result.ok:
            return result          # propagate the failure as-is
        user = result.value
    """

    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)


def unwrap(result: Result[T]) -> T:
    """
    Return the value of a successful Result.

    Raises:
        HTTPException: carrying the error's status code and message,
        with the error code in the ``X-Error-Code`` header.
    """
    if result.error is not None:
        raise HTTPException(
            status_code=result.error.status_code,
            detail=result.error.message,
            headers={"X-Error-Code": result.error.code},
        )
    return result.value  # type: ignore[return-value]
