"""
User API Endpoints

The authenticated user's own record: read, partial update, avatar, delete.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, Response
from folio.modules.users.api.auth_endpoints import duplicate_response, INTERNAL_ERROR
from folio.modules.users.api.schemas import UpdateProfileRequest, UpdateAvatarRequest
from folio.modules.users.auth.middleware import get_current_user, get_auth_service, get_profile_service
from folio.modules.users.domain.user import User
from folio.modules.users.services.auth_service import AuthService
from folio.modules.users.services.profile_service import ProfileService, ProfileChanges
from folio.modules.users.exceptions import DuplicateIdentity, UserNotFound

logger = logging.getLogger("folio.users.api")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user.to_public().to_dict()


@router.put("/me")
async def update_me(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Update name, username, email and/or description.

    Omitted and empty fields are left unchanged.
    """
    logger.debug(f"[user_endpoints.update_me] user_id={current_user.id}")

    try:
        result = await profile_service.update_profile(current_user, ProfileChanges(
            name=request.name,
            username=request.username,
            email=request.email,
            description=request.description,
        ))
    except DuplicateIdentity as e:
        return duplicate_response(e)
    except Exception as e:
        logger.error(f"[user_endpoints.update_me] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update profile")

    if not result.success:
        raise HTTPException(status_code=500, detail=result.message)
    return result.to_dict()


@router.put("/me/avatar")
async def update_avatar(
    request: UpdateAvatarRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Set the avatar reference (the image itself is stored elsewhere)."""
    try:
        result = await profile_service.update_avatar(current_user, request.avatar)
    except Exception as e:
        logger.error(f"[user_endpoints.update_avatar] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    if not result.success:
        raise HTTPException(status_code=500, detail=result.message)
    return result.to_dict()


@router.delete("/me", status_code=204)
async def delete_me(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Delete the account and everything it owns."""
    try:
        deleted = await profile_service.delete_account(current_user)
    except Exception as e:
        logger.error(f"[user_endpoints.delete_me] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=204)


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Get another user's public record."""
    try:
        user = await auth_service.get_user(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[user_endpoints.get_user] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    return user.to_public().to_dict()
