"""Registration and sign-in endpoints."""
from fastapi import APIRouter, Depends, status

from roster.interfaces.http.deps import (
    get_account_service,
    get_federated_resolver,
    get_token_verifier,
)
from roster.modules.accounts import AccountService, FederatedIdentityResolver, GoogleTokenVerifier
from roster.schemas import (
    GoogleLoginRequest,
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    OkResponse,
    RegisterRequest,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=OkResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an email/password account",
)
async def register(
    payload: RegisterRequest,
    account_service: AccountService = Depends(get_account_service),
) -> OkResponse:
    await account_service.register(payload.name, payload.email, payload.password)
    return OkResponse()


@router.post("/login", response_model=LoginResponse, summary="Email/password login")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    account = await account_service.login(payload.email, payload.password)
    return LoginResponse(
        id=account.id,
        name=account.display_name,
        email=account.email,
        avatar_url=account.avatar_url,
    )


@router.post("/google", response_model=GoogleLoginResponse, summary="Sign in with a Google ID token")
async def google_login(
    payload: GoogleLoginRequest,
    verifier: GoogleTokenVerifier = Depends(get_token_verifier),
    resolver: FederatedIdentityResolver = Depends(get_federated_resolver),
) -> GoogleLoginResponse:
    identity = await verifier.verify(payload.token or "")
    account = await resolver.resolve(identity.name, identity.email, identity.subject, identity.picture)
    return GoogleLoginResponse(id=account.id, name=account.display_name, email=account.email)
