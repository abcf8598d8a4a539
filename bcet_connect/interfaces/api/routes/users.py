"""Endpoints exposing the current user and the follow graph."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.users import (
    create_user,
    follow_user,
    get_user,
    unfollow_user,
)
from bcet_connect.domain.entities import User
from bcet_connect.infrastructure.database import get_db
from bcet_connect.interfaces.api.dependencies import get_current_user, require_admin
from bcet_connect.interfaces.api.schemas import FollowResponse, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user_account(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UserRead:
    """Create an account; only administrators may register users."""

    user = create_user(
        db,
        name=user_in.name,
        email=user_in.email,
        password=user_in.password,
        role=user_in.role,
    )
    return UserRead.model_validate(user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> UserRead:
    return UserRead.model_validate(get_user(db, user_id))


@router.post("/{user_id}/follow", response_model=FollowResponse)
def follow(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FollowResponse:
    changed = follow_user(db, current_user.id, user_id)
    return FollowResponse(following=True, changed=changed)


@router.delete("/{user_id}/follow", response_model=FollowResponse)
def unfollow(
    user_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FollowResponse:
    changed = unfollow_user(db, current_user.id, user_id)
    return FollowResponse(following=False, changed=changed)
