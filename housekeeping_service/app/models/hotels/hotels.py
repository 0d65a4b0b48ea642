from sqlalchemy import Boolean, Column, String, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from shared.core.database import Base


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    code = Column(String(32))
    # active|inactive
    status = Column(String(16), default="active", nullable=False)
    # IANA name, decides what "today" means for the roster
    timezone = Column(String(64), default="UTC", nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    is_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    rooms = relationship("Room", back_populates="hotel",
                         cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="hotel")
    housekeeping_tasks = relationship(
        "HousekeepingTask", back_populates="hotel")
