"""Administrator login."""

from fastapi import APIRouter, HTTPException, status

from shop_payroll.api.dependencies import Config
from shop_payroll.api.schemas import ErrorResponse, LoginRequest, TokenResponse
from shop_payroll.api.security import create_access_token, credentials_match

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(config: Config, payload: LoginRequest) -> TokenResponse:
    """Exchange the administrator credentials for a bearer token."""
    if not credentials_match(
        payload.email, payload.password, config.admin_email, config.admin_password
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = create_access_token(
        subject=payload.email,
        secret=config.jwt_secret,
        expiry_minutes=config.jwt_expiry_minutes,
    )
    return TokenResponse(token=token)
