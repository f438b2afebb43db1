import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from folio.modules.settings import get_settings
from folio.modules.database import connect_to_db, disconnect_from_db, init_db
from folio.modules.users.api import auth_router, user_router, profile_router

logger = logging.getLogger("folio.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_db()
    await init_db()
    logger.info("[lifespan] database connected, migrations applied")
    yield
    # Shutdown
    await disconnect_from_db()


app = FastAPI(title="Folio Accounts", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Profile routes live under /api/users/me/... and must not be shadowed by /api/users/{user_id}
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(user_router)


@app.get("/")
async def root():
    return {"status": "online", "system": "Folio Accounts"}
