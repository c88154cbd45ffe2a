# shopkeep/models/user.py

from sqlalchemy import Column, Integer, String, Enum, TIMESTAMP, func

from shopkeep.core.enums import UserRole
from shopkeep.core.utils import utcnow
from ..database import Base


class User(Base):
    """A person allowed to sign in; looked up by username."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(64), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="userrole"), nullable=False, default=UserRole.USER)

    created_at = Column(TIMESTAMP(timezone=False), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=False), default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username} role={self.role}>"
