from sqlalchemy import Boolean, Column, String, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import uuid

from shared.core.database import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(Uuid(as_uuid=True), ForeignKey(
        "hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    room_number = Column(String(32), nullable=False)
    room_type = Column(String(64))
    status = Column(String(24), default="available")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships (string references)
    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")
    housekeeping_tasks = relationship("HousekeepingTask", back_populates="room")
