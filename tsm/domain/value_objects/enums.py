"""Domain enums. Pure Python, no external dependencies.

Columns store plain integers; these enums name the values callers use.
"""

from enum import IntEnum


class AssignmentStatus(IntEnum):
    OPEN = 1
    IN_PROGRESS = 2
    DONE = 3
    CANCELLED = 4


class SchedulerStatus(IntEnum):
    ACTIVE = 1
    PAUSED = 2
    DISABLED = 3


class Priority(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3
