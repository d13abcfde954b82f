"""SQLAlchemy model for the extinguisher table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fireguard.infrastructure.database import Base


class ExtinguisherModel(Base):
    """Database representation of an extinguisher. Read-only for this service."""

    __tablename__ = "extinguisher"

    id = Column(String(64), primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    location = Column(String(200), nullable=False)
    building = Column(String(200), nullable=False)
    status = Column(String(30), nullable=False, default="Active")
    next_inspection = Column(DateTime, nullable=True, index=True)
    next_maintenance = Column(DateTime, nullable=True, index=True)

    tenant = relationship("TenantModel", lazy="joined")


__all__ = ["ExtinguisherModel"]
