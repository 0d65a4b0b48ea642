from sqlalchemy import Column, DateTime, String, Date, Text, ForeignKey, UniqueConstraint, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from shared.core.database import Base


class HousekeepingTask(Base):
    __tablename__ = "housekeeping_tasks"
    __table_args__ = (
        # one task per room per day; concurrent generators lose on this
        UniqueConstraint("hotel_id", "room_id", "task_date",
                         name="uq_housekeeping_task_room_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id = Column(Uuid(as_uuid=True), ForeignKey(
        "hotels.id"), nullable=False, index=True)
    room_id = Column(Uuid(as_uuid=True), ForeignKey(
        "rooms.id"), nullable=False)
    task_date = Column(Date, nullable=False, index=True)
    # morning|afternoon|night
    shift = Column(String(16), nullable=False, default="morning")
    # routine_cleaning|checkout_cleaning
    task_type = Column(String(24), nullable=False, default="routine_cleaning")
    # pending|in_progress|completed|skipped
    status = Column(String(16), nullable=False, default="pending")
    assigned_to = Column(String(64), index=True)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    # set once, when the task is completed
    completed_at = Column(DateTime(timezone=True))

    # Relationships
    hotel = relationship("Hotel", back_populates="housekeeping_tasks")
    room = relationship("Room", back_populates="housekeeping_tasks")
