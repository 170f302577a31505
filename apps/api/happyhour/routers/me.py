from fastapi import APIRouter, Depends

from happyhour.db.models import User
from happyhour.dependencies import get_current_user
from happyhour.schemas import UserResponse

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
):
    return UserResponse(
        id=str(current_user.id),
        email=current_user.email,
        display_name=current_user.display_name,
    )
