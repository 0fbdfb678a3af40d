"""
Admin login endpoints.

Thin wrappers around the browsing context's AdminAuthFlow. Each endpoint
returns the FlowResult of one transition.
"""

from fastapi import APIRouter, Depends

from modules.admin_auth.models import EmailSubmission, FlowResult, OTPSubmission

from ..dependencies import BrowsingContext
from ..middleware.context import get_browsing_context

router = APIRouter()


@router.post("/email", response_model=FlowResult)
async def submit_email(
    request: EmailSubmission,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> FlowResult:
    """Check the email and send a code if it belongs to an admin."""
    return await ctx.admin_flow.submit_email(request.email)


@router.post("/otp", response_model=FlowResult)
async def submit_otp(
    request: OTPSubmission,
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> FlowResult:
    """Redeem the code and sign in."""
    return await ctx.admin_flow.submit_otp(request.otp)


@router.post("/resend", response_model=FlowResult)
async def resend_otp(
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> FlowResult:
    return await ctx.admin_flow.resend_otp()


@router.post("/back", response_model=FlowResult)
async def back_to_email(
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> FlowResult:
    return ctx.admin_flow.back_to_email()


@router.post("/reset", response_model=FlowResult)
async def reset_flow(
    ctx: BrowsingContext = Depends(get_browsing_context),
) -> FlowResult:
    """Abandon the current attempt. An issued code is left to expire."""
    ctx.admin_flow.reset()
    return FlowResult(step=ctx.admin_flow.step, success=True, message="Enter your admin email")
