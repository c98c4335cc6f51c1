"""
Authentication API endpoints.

Login issues a signed bearer token for an officer; ``/me`` and ``/refresh``
require a valid token. Logout is stateless and only acknowledged.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from clubhouse.api import envelope
from clubhouse.api.auth import CredentialStore, authenticate, get_credential_store
from clubhouse.api.deps import get_current_user
from clubhouse.db import schemas
from clubhouse.utils.token_crypto import TokenUser, issue_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
def login(
    payload: schemas.LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    user = authenticate(store, payload.username, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    body = schemas.TokenResponse(token=issue_token(user), user=schemas.User(**user.to_dict()))
    return envelope.ok(body, "Login successful")


@router.post("/logout")
def logout():
    return envelope.ok(message="Logout successful")


@router.get("/me")
def me(user: TokenUser = Depends(get_current_user)):
    return envelope.ok(schemas.User(**user.to_dict()))


@router.post("/refresh")
def refresh(user: TokenUser = Depends(get_current_user)):
    return envelope.ok({"token": issue_token(user)}, "Token refreshed")
