"""Change-password flow for the signed-in user.

Step 1 verifies the current password and emails a one-time code; step 2
exchanges the code for a reset token and sets the new password.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_auth_service, get_current_user
from app.schemas.auth import ChangePasswordConfirm, ChangePasswordStart, MessageResponse, SessionUser
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/security",
    tags=["Admin - Security"],
)


@router.post("/password/start", response_model=MessageResponse, summary="Request a password change code")
async def start_password_change(
    payload: ChangePasswordStart,
    auth: AuthService = Depends(get_auth_service),
    current_user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    """
    Raises:
        HTTPException: 400 if the current password is wrong or the email cannot be sent
    """
    check = auth.sign_in_with_password(current_user.email, payload.current_password)
    if not check.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    # The verification sign-in must not leave a second live session behind
    auth.sign_out(check.data["access_token"])

    sent = auth.send_reset_password_email(current_user.email)
    if not sent.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=sent.error.message)
    return MessageResponse(message=f"Verification code sent to {current_user.email}")


@router.post("/password/confirm", response_model=MessageResponse, summary="Confirm password change")
async def confirm_password_change(
    payload: ChangePasswordConfirm,
    auth: AuthService = Depends(get_auth_service),
    current_user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    exchanged = auth.exchange_reset_code(current_user.email, payload.code)
    if not exchanged.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exchanged.error.message)

    result = auth.reset_password(exchanged.data["reset_token"], payload.new_password)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error.message)

    logger.info(f"[AUTH] Password changed for {current_user.id}")
    return MessageResponse(message="Password updated")
