"""SQLAlchemy model for the tenant table."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from fireguard.infrastructure.database import Base


class TenantModel(Base):
    """Company owning users and extinguishers. Read-only for this service."""

    __tablename__ = "tenant"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(120), nullable=False)

    users = relationship("UserModel", back_populates="tenant", lazy="selectin")


__all__ = ["TenantModel"]
