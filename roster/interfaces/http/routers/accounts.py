"""Endpoints acting on the calling account."""
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from roster.interfaces.http.deps import get_account_service, get_current_account_id
from roster.modules.accounts import UNSET, AccountService, ProfileUpdateInput
from roster.schemas import AccountProfileResponse, OkResponse, ProfileUpdateRequest, TutorialUpdateRequest

router = APIRouter()


@router.get("/me", response_model=AccountProfileResponse, summary="Current profile")
async def read_profile(
    account_id: int = Depends(get_current_account_id),
    account_service: AccountService = Depends(get_account_service),
) -> AccountProfileResponse:
    account = await account_service.get_profile(account_id)
    return AccountProfileResponse(
        id=account.id,
        name=account.display_name,
        email=account.email,
        avatar_url=account.avatar_url,
        tutorial_seen=account.tutorial_seen,
    )


@router.put("/me", response_model=OkResponse, summary="Update name, avatar and optionally password")
async def update_profile(
    payload: ProfileUpdateRequest,
    account_id: int = Depends(get_current_account_id),
    account_service: AccountService = Depends(get_account_service),
) -> OkResponse:
    avatar_url = payload.resolved_avatar_url
    await account_service.update_profile(
        account_id,
        ProfileUpdateInput(
            display_name=payload.name,
            avatar_url=UNSET if avatar_url is None else avatar_url,
            password=payload.password or UNSET,
        ),
    )
    return OkResponse()


@router.put("/me/tutorial", status_code=status.HTTP_204_NO_CONTENT, summary="Mark the tutorial as seen")
async def update_tutorial(
    payload: Optional[TutorialUpdateRequest] = None,
    account_id: int = Depends(get_current_account_id),
    account_service: AccountService = Depends(get_account_service),
) -> Response:
    seen = True
    if payload is not None and payload.tutorial_seen is not None:
        seen = payload.tutorial_seen
    await account_service.set_tutorial_seen(account_id, seen)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
