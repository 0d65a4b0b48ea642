from .housekeeping_tasks import HousekeepingTask
