from typing import Optional

from fastapi import APIRouter, Query, status

from shopkeep.dependencies import CurrentUser, DbSession, page_size_or_default
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.user import UserInsert, UserReadOnly, UserUpdate
from shopkeep.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserReadOnly, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserInsert, db: DbSession, current_user: CurrentUser):
    return await UserService(db).create_user(user_data, current_user)


@router.get("", response_model=Paginated[UserReadOnly])
async def list_users(
    db: DbSession,
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
):
    return await UserService(db).list_users(page=page, page_size=page_size_or_default(page_size))


@router.get("/me", response_model=UserReadOnly)
async def current_user_details(current_user: CurrentUser):
    return UserReadOnly.from_orm_model(current_user)


@router.get("/{user_id}", response_model=UserReadOnly)
async def get_user(user_id: int, db: DbSession, current_user: CurrentUser):
    return await UserService(db).get_user(user_id)


@router.put("/{user_id}", response_model=UserReadOnly)
async def update_user(user_id: int, user_data: UserUpdate, db: DbSession, current_user: CurrentUser):
    return await UserService(db).update_user(user_id, user_data, current_user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: DbSession, current_user: CurrentUser):
    await UserService(db).delete_user(user_id, current_user)
