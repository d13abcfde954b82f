"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fireguard.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a tenant user. Read-only for this service."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    email = Column(String(120), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    role = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default="active")

    tenant = relationship("TenantModel", back_populates="users")


__all__ = ["UserModel"]
