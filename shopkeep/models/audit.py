"""
Audit columns shared by soft-deletable entities.

Rows carrying this mixin are never physically removed: deletion sets
``is_active`` to False and stamps ``deleted_at``. The two move together.
"""

from sqlalchemy import Column, String, Boolean, TIMESTAMP, func, true

from shopkeep.core.utils import utcnow


class AuditMixin:
    created_at = Column(
        TIMESTAMP(timezone=False),
        default=utcnow,
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        TIMESTAMP(timezone=False),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False
    )
    created_by = Column(String, nullable=True)
    last_updated_by = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    deleted_at = Column(TIMESTAMP(timezone=False), nullable=True)

    def soft_delete(self, actor_name: str) -> None:
        self.is_active = False
        self.deleted_at = utcnow()
        self.last_updated_by = actor_name

    def restore(self, actor_name: str) -> None:
        self.is_active = True
        self.deleted_at = None
        self.last_updated_by = actor_name
