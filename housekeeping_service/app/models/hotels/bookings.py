import uuid
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(Uuid(as_uuid=True), ForeignKey("hotels.id"), nullable=False)
    room_id = Column(Uuid(as_uuid=True), ForeignKey("rooms.id"), nullable=False, index=True)
    guest_name = Column(String(200))
    status = Column(String(24), default="reserved")
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    hotel = relationship("Hotel", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")
