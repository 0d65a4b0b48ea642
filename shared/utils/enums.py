from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"
    HOUSEKEEPING = "housekeeping"
    GUEST = "guest"

    @classmethod
    def managers(cls):
        return {cls.ADMIN.value, cls.RECEPTIONIST.value}


class RecordStatus(str, Enum):
    active = "active"
    inactive = "inactive"
