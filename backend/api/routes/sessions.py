"""
Session overview, role switching and logout endpoints.
"""

from fastapi import APIRouter, Depends

from modules.portal.models import (
    LogoutResponse,
    SessionOverview,
    SwitchRoleRequest,
    SwitchRoleResponse,
)
from modules.sessions.models import Role

from ..dependencies import BrowsingContext
from ..middleware.context import get_browsing_context

router = APIRouter()


@router.get("", response_model=SessionOverview)
async def get_sessions(
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> SessionOverview:
    """
    Roles with an active session in this browsing context.

    Served from the switcher's last poll, so a change made by another
    flow can take up to one poll interval to appear.
    """
    ctx.switcher.tick()
    ctx.indicator.tick()

    return SessionOverview(
        active_roles=ctx.switcher.active_roles,
        current_role=ctx.switcher.current_role(),
        options=ctx.switcher.options(),
        switcher_visible=ctx.switcher.is_visible(),
        indicator_visible=ctx.indicator.is_visible(),
        indicator_count=ctx.indicator.count,
    )


@router.post("/switch", response_model=SwitchRoleResponse)
async def switch_role(
    request: SwitchRoleRequest,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> SwitchRoleResponse:
    switched = ctx.switcher.switch_to_role(request.role)
    return SwitchRoleResponse(
        switched=switched,
        redirect_to=ctx.navigator.last if switched else None,
    )


@router.post("/{role}/logout", response_model=LogoutResponse)
async def logout(
    role: Role,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> LogoutResponse:
    """
    Log out of one role.

    Other roles held by the browsing context stay signed in locally.
    """
    if role == Role.CLIENT:
        result = await ctx.client_auth.sign_out()
        return LogoutResponse(
            success=result.success,
            redirect_to=result.redirect_to,
            error=result.error,
        )

    signed_out = await ctx.admin_auth.logout_admin()
    route = ctx.portal.logout(role)
    ctx.admin_flow.reset()
    return LogoutResponse(
        success=signed_out,
        redirect_to=route,
        error=None if signed_out else "Failed to log out. Please try again.",
    )
