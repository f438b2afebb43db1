"""
User Profile API Endpoints

Socials, contact, education and skills of the authenticated user.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, Response
from folio.modules.users.api.auth_endpoints import INTERNAL_ERROR
from folio.modules.users.api.schemas import (
    UpdateSocialsRequest,
    UpdateContactRequest,
    EducationRequest,
    ReplaceEducationRequest,
    SkillRequest,
)
from folio.modules.users.auth.middleware import get_current_user, get_profile_service
from folio.modules.users.domain.user import User
from folio.modules.users.services.profile_service import ProfileService
from folio.modules.users.exceptions import RecordNotFound

logger = logging.getLogger("folio.users.profile_api")

router = APIRouter(prefix="/api/users/me", tags=["user-profiles"])


@router.get("/profile")
async def get_profile(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Get the full profile: user, socials, contact, education, skills."""
    try:
        return await profile_service.get_profile(current_user)
    except Exception as e:
        logger.error(f"[profile_endpoints.get_profile] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/socials")
async def get_socials(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        socials = await profile_service.get_socials(current_user.id)
        return socials.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.get_socials] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.put("/socials")
async def update_socials(
    request: UpdateSocialsRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Replace all social links."""
    try:
        socials = await profile_service.update_socials(current_user.id, request.to_links())
        return socials.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.update_socials] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/contact")
async def get_contact(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        contact = await profile_service.get_contact(current_user.id)
        return contact.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.get_contact] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.put("/contact")
async def update_contact(
    request: UpdateContactRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Replace contact details."""
    try:
        contact = await profile_service.update_contact(current_user.id, request.model_dump())
        return contact.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.update_contact] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("/education")
async def list_education(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        entries = await profile_service.list_education(current_user.id)
        return {"education": [e.to_dict() for e in entries], "count": len(entries)}
    except Exception as e:
        logger.error(f"[profile_endpoints.list_education] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.post("/education", status_code=201)
async def add_education(
    request: EducationRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        entry = await profile_service.add_education(current_user.id, request.model_dump())
        return entry.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.add_education] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.put("/education")
async def replace_education(
    request: ReplaceEducationRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Replace the whole education list."""
    try:
        entries = await profile_service.replace_education(
            current_user.id,
            [e.model_dump() for e in request.education]
        )
        return {"education": [e.to_dict() for e in entries], "count": len(entries)}
    except Exception as e:
        logger.error(f"[profile_endpoints.replace_education] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.delete("/education/{education_id}", status_code=204)
async def delete_education(
    education_id: str,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        await profile_service.delete_education(current_user.id, education_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[profile_endpoints.delete_education] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return Response(status_code=204)


@router.get("/skills")
async def get_skills(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        skills = await profile_service.get_skills(current_user.id)
        return skills.to_dict()
    except Exception as e:
        logger.error(f"[profile_endpoints.get_skills] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.post("/skills")
async def add_skill(
    request: SkillRequest,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Add a skill; adding an existing one changes nothing."""
    try:
        skills = await profile_service.add_skill(current_user.id, request.skill)
        return skills.to_dict()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"[profile_endpoints.add_skill] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.delete("/skills/{skill}")
async def remove_skill(
    skill: str,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    try:
        skills = await profile_service.remove_skill(current_user.id, skill)
        return skills.to_dict()
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[profile_endpoints.remove_skill] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
