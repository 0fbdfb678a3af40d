"""
Browsing context resolution.

Every stateful endpoint is scoped to the browsing context named by the
X-Portal-Context header. The browser generates the ID once per tab or
profile and sends it with every request.
"""

import re
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ..dependencies import BrowsingContext, ServiceContainer, get_container

CONTEXT_HEADER = "X-Portal-Context"
_CONTEXT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{8,128}$")


class MissingContextError(HTTPException):
    """Raised when the context header is absent or malformed."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def get_browsing_context(
    x_portal_context: Optional[str] = Header(default=None),
    container: ServiceContainer = Depends(get_container),
) -> BrowsingContext:
    """
    Dependency that resolves the caller's browsing context.

    Usage:
        @router.get("/sessions")
        async def overview(ctx: BrowsingContext = Depends(get_browsing_context)):
            ...
    """
    if not x_portal_context:
        raise MissingContextError(f"{CONTEXT_HEADER} header is required")
    if not _CONTEXT_ID_PATTERN.match(x_portal_context):
        raise MissingContextError(f"{CONTEXT_HEADER} header is malformed")

    return container.contexts.get_or_create(x_portal_context)
