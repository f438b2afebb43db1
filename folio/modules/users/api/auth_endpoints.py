"""
Authentication API Endpoints

Sign-up and sign-in. Both return a token and the public user record.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
from folio.modules.users.api.schemas import SignUpRequest, SignInRequest
from folio.modules.users.auth.middleware import get_auth_service
from folio.modules.users.services.auth_service import AuthService, RegistrationData
from folio.modules.users.exceptions import AuthenticationFailed, DuplicateIdentity

logger = logging.getLogger("folio.users.auth_api")

router = APIRouter(prefix="/api/auth", tags=["auth"])

INTERNAL_ERROR = "Internal server error"


def duplicate_response(error: DuplicateIdentity) -> JSONResponse:
    """Duplicate username/email is a conflict, reported with a message body."""
    return JSONResponse(status_code=409, content={"success": False, "message": error.message})


@router.post("/signup", status_code=201)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register a new account and sign it in."""
    logger.debug(f"[auth_endpoints.sign_up] username={request.username}")

    try:
        result = await auth_service.register(RegistrationData(
            name=request.name,
            username=request.username,
            email=request.email,
            password=request.password,
            description=request.description,
        ))
        return result.to_dict("User created successfully")
    except DuplicateIdentity as e:
        return duplicate_response(e)
    except Exception as e:
        logger.error(f"[auth_endpoints.sign_up] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.post("/signin")
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Sign in with username or email and password."""
    try:
        result = await auth_service.sign_in(request.username_or_email, request.password)
        return result.to_dict("Login successfully")
    except AuthenticationFailed as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        logger.error(f"[auth_endpoints.sign_in] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
