"""Endpoints managing communities and their membership."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from bcet_connect.application.use_cases.users import (
    create_community,
    join_community,
    leave_community,
)
from bcet_connect.domain.entities import User
from bcet_connect.infrastructure.database import get_db
from bcet_connect.interfaces.api.dependencies import get_current_user, require_admin
from bcet_connect.interfaces.api.schemas import (
    CommunityCreate,
    CommunityRead,
    MembershipResponse,
)

router = APIRouter(prefix="/communities", tags=["communities"])


@router.post("/", response_model=CommunityRead, status_code=status.HTTP_201_CREATED)
def create_new_community(
    community_in: CommunityCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> CommunityRead:
    community_id = create_community(db, community_in.name)
    return CommunityRead(id=community_id, name=community_in.name.strip())


@router.post("/{community_id}/membership", response_model=MembershipResponse)
def join(
    community_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MembershipResponse:
    changed = join_community(db, current_user.id, community_id)
    return MembershipResponse(member=True, changed=changed)


@router.delete("/{community_id}/membership", response_model=MembershipResponse)
def leave(
    community_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MembershipResponse:
    changed = leave_community(db, current_user.id, community_id)
    return MembershipResponse(member=False, changed=changed)
