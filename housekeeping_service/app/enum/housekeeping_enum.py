from enum import Enum


class HousekeepingTaskStatus(str, Enum):

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    skipped = "skipped"


class HousekeepingShift(str, Enum):

    morning = "morning"
    afternoon = "afternoon"
    night = "night"


class HousekeepingTaskType(str, Enum):

    routine_cleaning = "routine_cleaning"
    checkout_cleaning = "checkout_cleaning"


class BookingStatus(str, Enum):

    reserved = "reserved"
    in_house = "in_house"
    cancelled = "cancelled"
    checked_out = "checked_out"
    no_show = "no_show"


# Bookings in these states never leave a room to turn over
INACTIVE_BOOKING_STATUSES = {BookingStatus.cancelled.value, BookingStatus.no_show.value}

TERMINAL_TASK_STATUSES = {HousekeepingTaskStatus.completed, HousekeepingTaskStatus.skipped}
