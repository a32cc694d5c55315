"""Invite routes for the signed-in user (pending screen)."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from simskut.application.usecase.auth import GetCurrentUserUseCase
from simskut.application.usecase.invite import GetMyInviteUseCase, SyncApprovalUseCase
from simskut.application.usecase.invite.get_my_invite import GetMyInviteResponse
from simskut.application.usecase.invite.sync_approval import SyncApprovalResponse
from simskut.interface.api.auth import require_user, user_id_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


@router.get("/me", response_model=GetMyInviteResponse)
async def get_my_invite(
    get_my_invite_use_case: FromDishka[GetMyInviteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetMyInviteResponse:
    """Get the current user's latest invite and approval status."""
    user = await require_user(auth_token, get_current_user_use_case, "view your invite")
    return await get_my_invite_use_case.execute(user_id_of(user))


@router.post("/me/sync", response_model=SyncApprovalResponse)
async def sync_approval(
    sync_approval_use_case: FromDishka[SyncApprovalUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> SyncApprovalResponse:
    """Re-check approval from the pending screen.

    When the invite is approved the code is recorded on the profile and the
    response routes the user to /feed.
    """
    user = await require_user(
        auth_token, get_current_user_use_case, "check your approval"
    )
    result = await sync_approval_use_case.execute(user_id_of(user))
    logger.info(f"Approval sync for user_id={user.user_id}: {result.status.value}")
    return result
