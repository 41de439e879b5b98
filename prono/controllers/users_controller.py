"""
Users controller - registration and user lookups
"""

from fastapi import APIRouter, HTTPException, status

from prono.core.dependencies import CurrentClock, Database
from prono.models.user import User, UserCreate, UserResponse
from prono.services.user_service import (
    UserService,
    InvalidUsernameError,
    UsernameTakenError,
    UserNotFoundError
)


router = APIRouter(prefix="/users", tags=["users"])


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        total_points=user.total_points
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreate, db: Database, clock: CurrentClock):
    """
    Register a display name. New users start with 0 points.
    """
    user_service = UserService(db)

    try:
        user = await user_service.register(user_data.username, clock.now())
    except InvalidUsernameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return _to_response(user)


@router.get("", response_model=list[UserResponse])
async def list_users(db: Database):
    """
    All users, highest total first.
    """
    user_service = UserService(db)
    users = await user_service.list_users()
    return [_to_response(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: Database):
    user_service = UserService(db)

    try:
        user = await user_service.get_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return _to_response(user)
