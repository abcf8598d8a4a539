"""Endpoint issuing bearer tokens."""

import logging

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.users import AuthenticationStatus, authenticate_user
from bcet_connect.domain.errors import Forbidden, Unauthenticated
from bcet_connect.infrastructure.database import get_db
from bcet_connect.infrastructure.security import create_user_token
from bcet_connect.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise Unauthenticated("Incorrect email or password")
    if auth_status is AuthenticationStatus.INACTIVE:
        raise Forbidden("Inactive user")

    logger.info("User %s signed in", user.id)
    return {
        "access_token": create_user_token(user.id, user.role),
        "token_type": "bearer",
        "role": user.role,
    }
