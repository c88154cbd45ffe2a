"""
Users: creation, lookup, password and role changes, removal.

Only administrators manage other accounts. A user may change their own
password. Users are hard-deleted; sales keep the creator's username as
free text so history is unaffected.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.config import get_settings
from shopkeep.core.enums import UserRole
from shopkeep.core.exceptions import EntityError
from shopkeep.core.security import hash_password_async, verify_password_async
from shopkeep.core.utils import model_to_schema, models_to_schemas
from shopkeep.models.user import User
from shopkeep.repositories.user_repository import UserRepository
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.user import UserInsert, UserReadOnly, UserUpdate

logger = logging.getLogger(__name__)

ERROR_PREFIX = "User"


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def _get_or_raise(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise EntityError.not_found(ERROR_PREFIX, f"User with id {user_id} not found")
        return user

    async def exists_by_username(self, username: str) -> bool:
        return await self.users.exists_by_username(username)

    async def create_user(self, user_data: UserInsert, actor: Optional[User]) -> UserReadOnly:
        """
        Create a user.

        Args:
            user_data: Validated user data
            actor: Acting administrator, or None for the startup bootstrap

        Raises:
            EntityError: UserNotAuthorized, UserAlreadyExists
        """
        if actor is not None and not actor.is_admin:
            logger.warning(f"User '{actor.username}' tried to create user '{user_data.username}'")
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can create users")

        if await self.users.exists_by_username(user_data.username):
            raise EntityError.already_exists(
                ERROR_PREFIX, f"User with username '{user_data.username}' already exists"
            )

        try:
            user = await self.users.create(User(
                username=user_data.username,
                password_hash=await hash_password_async(user_data.password),
                role=user_data.role,
            ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User '{user.username}' created with role {user.role.value} (id={user.id})")
        return await model_to_schema(user, UserReadOnly)

    async def get_user(self, user_id: int) -> UserReadOnly:
        return await model_to_schema(await self._get_or_raise(user_id), UserReadOnly)

    async def get_user_by_username(self, username: str) -> Optional[UserReadOnly]:
        user = await self.users.find_by_username(username)
        if user is None:
            return None
        return await model_to_schema(user, UserReadOnly)

    async def list_users(self, page: int = 1, page_size: Optional[int] = None) -> Paginated[UserReadOnly]:
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE
        result = await self.users.list(page=page, page_size=page_size, order_by=User.username)
        items = await models_to_schemas(result["items"], UserReadOnly)
        return Paginated[UserReadOnly].from_page(result, items)

    async def update_user(self, user_id: int, user_data: UserUpdate, actor: User) -> UserReadOnly:
        """
        Change a password and/or role.

        Raises:
            EntityError: UserNotFound, UserNotAuthorized
        """
        user = await self._get_or_raise(user_id)

        if not actor.is_admin and actor.id != user.id:
            raise EntityError.not_authorized(ERROR_PREFIX, "You can only update your own account")
        if user_data.role is not None and user_data.role != user.role and not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can change roles")

        values: Dict[str, Any] = {}
        if user_data.password is not None:
            values["password_hash"] = await hash_password_async(user_data.password)
        if user_data.role is not None:
            values["role"] = user_data.role

        try:
            user = await self.users.update(user, values)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User id={user.id} updated by '{actor.username}' (fields: {sorted(values)})")
        return await model_to_schema(user, UserReadOnly)

    async def delete_user(self, user_id: int, actor: User) -> None:
        """
        Remove a user permanently.

        Raises:
            EntityError: UserNotAuthorized, UserNotFound, UserInvalidArgument
        """
        if not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can delete users")

        user = await self._get_or_raise(user_id)
        if user.id == actor.id:
            raise EntityError.invalid_argument(ERROR_PREFIX, "Administrators cannot delete their own account")

        try:
            await self.users.delete(user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User '{user.username}' (id={user_id}) deleted by '{actor.username}'")

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the stored user when the password matches, else None."""
        user = await self.users.find_by_username(username)
        if user is None or not await verify_password_async(password, user.password_hash):
            return None
        return user

    async def ensure_admin(self, username: str, password: str) -> bool:
        """
        Create the bootstrap administrator if missing.

        Returns:
            True if a user was created
        """
        if await self.users.exists_by_username(username):
            return False
        await self.create_user(UserInsert(username=username, password=password, role=UserRole.ADMIN), actor=None)
        return True
