from typing import Optional

from shopkeep.models.user import User
from .base import BaseRepository
from .specs import Spec


class UserRepository(BaseRepository[User, int]):
    model = User

    async def find_by_username(self, username: str) -> Optional[User]:
        """Exact-match lookup; None when no such user is stored."""
        return await self.find_one(Spec.eq("username", username))

    async def exists_by_username(self, username: str) -> bool:
        return await self.exists(Spec.eq("username", username))
