"""Auth API router: login and registration.

Login verifies the caller against the user store and returns a signed
bearer token. Registration hashes the password and relies on the store's
unique indexes to reject duplicate usernames or emails.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from api.auth import unauthorized
from core.auth.passwords import PasswordHasher, get_password_hasher
from core.auth.tokens import TokenService, get_token_service
from core.exceptions import DuplicateUserError, InvalidCredentialsError
from verticals.accounts.credentials import CredentialVerifier
from verticals.accounts.models.schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from verticals.accounts.repository import UserRepository, get_user_repository

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange a username/password pair for a bearer token."""
    logger.info("Login attempt", username=request.username)
    verifier = CredentialVerifier(users, hasher)
    try:
        username = await verifier.verify(request.username, request.password)
    except InvalidCredentialsError:
        logger.warning("Login rejected", username=request.username)
        raise unauthorized("Invalid credentials")

    token = tokens.issue(username)
    logger.info("Login succeeded", username=username)
    return TokenResponse(token=token)


@router.post("/register", response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Create a user account."""
    logger.info("Registering user", username=request.username)
    data = request.model_dump(exclude={"password"})
    data["password_hash"] = await run_in_threadpool(hasher.hash, request.password)

    try:
        user = await users.create_user(data)
    except DuplicateUserError as exc:
        logger.warning("Registration rejected, user exists", username=exc.username)
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info("Registered user", username=request.username, user_id=user["id"])
    return RegisterResponse(message="User registered successfully.", id=user["id"])
