"""Catalog error responses in RFC 9457 Problem Details format.

Every body carries ``type``, ``title``, ``status`` and ``message``; ``detail``,
``instance`` and per-problem members (``violations``, ``slug``,
``resource_type``...) are added when known.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PROBLEM_TYPE_BASE = "https://travel-catalog.example/problems/"


def problem_type(name: str) -> str:
    return PROBLEM_TYPE_BASE + name


class ProblemDetailsException(HTTPException):
    """
    Base class for every error the catalog API returns on purpose.

    https://www.rfc-editor.org/rfc/rfc9457
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            title: Short summary shared by every occurrence of this problem type
            detail: Explanation of this occurrence; also sent as ``message``
            type_uri: Problem type URI, ``about:blank#<status>`` when omitted
            instance: URI of the request that failed
            extensions: Extra members merged into the body
            headers: HTTP headers to include in the response
        """
        self.title = title
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        body: Dict[str, Any] = {
            "type": self.type_uri,
            "title": title,
            "status": status_code,
            "message": detail or title,
        }
        if detail:
            body["detail"] = detail
        if instance:
            body["instance"] = instance
        body.update(self.extensions)
        self.problem_details = body

        super().__init__(status_code=status_code, detail=body, headers=headers)


class ValidationError(ProblemDetailsException):
    """400 for input the catalog rejects; ``violations`` lists ``{path, message}`` pairs."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        violations: Optional[list[Dict[str, str]]] = None,
        instance: Optional[str] = None,
    ):
        super().__init__(
            status_code=400,
            title="Validation Error",
            detail=detail,
            type_uri=problem_type("validation-error"),
            instance=instance,
            extensions={"violations": violations} if violations else None,
        )


class SlugConflictError(ProblemDetailsException):
    """400 for a slug already used by another record of the same collection."""

    def __init__(self, slug: str, resource_type: str = "resource", instance: Optional[str] = None):
        super().__init__(
            status_code=400,
            title="Slug Conflict",
            detail=f"Slug '{slug}' already exists. Please choose a different one.",
            type_uri=problem_type("slug-conflict"),
            instance=instance,
            extensions={"slug": slug, "resource_type": resource_type},
        )


class NotFoundError(ProblemDetailsException):
    """404 for an unknown id or slug."""

    def __init__(self, resource_type: str = "resource", resource_id: Optional[str] = None):
        if resource_id:
            detail = f"The requested {resource_type} '{resource_id}' could not be found"
        else:
            detail = f"The requested {resource_type} could not be found"

        extensions = {"resource_type": resource_type}
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri=problem_type("resource-not-found"),
            extensions=extensions,
        )


class InternalServerError(ProblemDetailsException):
    """500 carrying an ``error_id`` that also appears in the server log."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred while processing the request",
        error_id: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        super().__init__(
            status_code=500,
            title="Internal Server Error",
            detail=detail,
            type_uri=problem_type("internal-server-error"),
            instance=instance,
            extensions={
                "error_id": error_id or str(uuid.uuid4()),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.problem_details, headers=exc.headers)


def _violations(exc: RequestValidationError) -> list[Dict[str, str]]:
    violations = []
    for error in exc.errors():
        # Body fields are reported by name; query and path params keep their prefix
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        violations.append({
            "path": ".".join(location),
            "message": error.get("msg", "Invalid value"),
        })
    return violations


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report pydantic request validation failures as a 400 ``ValidationError``."""
    violations = _violations(exc)

    detail = "The request data failed validation"
    if violations and violations[0]["path"]:
        detail = f"{violations[0]['path']}: {violations[0]['message']}"

    problem = ValidationError(detail=detail, violations=violations, instance=str(request.url))
    return JSONResponse(status_code=problem.status_code, content=problem.problem_details)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception and answer with an opaque 500 problem."""
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    problem = InternalServerError(error_id=error_id, instance=str(request.url))
    return JSONResponse(status_code=problem.status_code, content=problem.problem_details)
