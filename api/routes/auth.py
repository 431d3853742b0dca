"""
api/routes/auth.py -- Login and registration REST endpoints.

Routes:
  POST /api/auth   -- password login; returns the user DTO and sets the JWT cookie
  POST /api/user   -- self-service registration, role forced to "user"
  POST /api/admin  -- admin registration, role forced to "admin" (admin only)

Security:
  POST /auth and POST /user are rate-limited per client IP. The limits are
  read from Settings on every request; @limiter.limit must sit below
  @router.post so the registered endpoint is the limited wrapper.
  login() equalizes timing and returns one generic 401 for unknown email and
  wrong password alike.
  Cache-Control: no-store on login responses.
  The request body never carries a role; each route forces its own.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import Envelope, UserResponse
from auth import service
from auth.dependencies import require_admin
from auth.models import User
from auth.schemas import Credentials, RegisterRequest, RoleEnum
from auth.store import UserStore
from auth.tokens import create_access_token, set_auth_cookie
from core.config import get_settings


def _login_limit() -> str:
    return get_settings().login_rate_limit


def _register_limit() -> str:
    return get_settings().register_rate_limit


# Auth policy:
# - POST /api/auth:   public -- login endpoint must be unauthenticated
# - POST /api/user:   public -- self-service registration of standard accounts
# - POST /api/admin:  requires admin (require_admin); the first admin is
#                     created with `python main.py create-admin`
router = APIRouter()


@router.post("/auth", response_model=Envelope[UserResponse])
@limiter.limit(_login_limit)
def login(request: Request, body: Credentials) -> JSONResponse:
    """Authenticate with email and password; set the JWT cookie."""
    user_store: UserStore = request.app.state.user_store
    user = service.login(user_store, body)

    token = create_access_token(user.id, user.email, user.role)
    resp = JSONResponse(
        status_code=200,
        content=Envelope[UserResponse](data=UserResponse.from_user(user)).model_dump(),
    )
    set_auth_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/user", response_model=Envelope[UserResponse], status_code=201)
@limiter.limit(_register_limit)
def register_user(request: Request, body: Credentials) -> Envelope[UserResponse]:
    """Create a standard account. Any role in the body is rejected by validation."""
    user_store: UserStore = request.app.state.user_store
    user = service.register(
        user_store,
        RegisterRequest(email=body.email, password=body.password, role=RoleEnum.user),
    )
    return Envelope[UserResponse](data=UserResponse.from_user(user))


@router.post("/admin", response_model=Envelope[UserResponse], status_code=201)
def register_admin(
    request: Request,
    body: Credentials,
    current_user: User = Depends(require_admin),
) -> Envelope[UserResponse]:
    """Create an admin account. The caller must already be an admin."""
    user_store: UserStore = request.app.state.user_store
    user = service.register(
        user_store,
        RegisterRequest(email=body.email, password=body.password, role=RoleEnum.admin),
    )
    return Envelope[UserResponse](data=UserResponse.from_user(user))
