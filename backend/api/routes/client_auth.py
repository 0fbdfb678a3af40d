"""
Client account endpoints.
"""

from fastapi import APIRouter, Depends

from modules.portal.models import (
    AuthResult,
    ClientLoginRequest,
    ClientRegisterRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
)

from ..dependencies import BrowsingContext
from ..middleware.context import get_browsing_context

router = APIRouter()


@router.post("/login", response_model=AuthResult)
async def login(
    request: ClientLoginRequest,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> AuthResult:
    return await ctx.client_auth.sign_in(request.email, request.password)


@router.post("/register", response_model=AuthResult)
async def register(
    request: ClientRegisterRequest,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> AuthResult:
    """Create a client account and sign it in when the provider allows."""
    return await ctx.client_auth.register(
        request.email,
        request.password,
        request.name,
        request.selected_services,
    )


@router.post("/password/reset", response_model=AuthResult)
async def reset_password(
    request: PasswordResetRequest,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> AuthResult:
    return await ctx.client_auth.reset_password(request.email)


@router.post("/password/update", response_model=AuthResult)
async def update_password(
    request: PasswordUpdateRequest,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> AuthResult:
    return await ctx.client_auth.update_password(request.password)


@router.post("/logout", response_model=AuthResult)
async def logout(
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> AuthResult:
    return await ctx.client_auth.sign_out()
