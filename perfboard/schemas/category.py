from enum import Enum


class Category(str, Enum):
    """The five fixed performance dimensions every evaluation is scored on."""

    PRODUCTIVITY = "Productivity"
    WORK_QUALITY = "Work Quality"
    ATTITUDE_TEAMWORK = "Attitude & Teamwork"
    LEADERSHIP = "Leadership"
    COMMUNICATION = "Communication"


ALL_CATEGORIES: tuple[Category, ...] = tuple(Category)

MIN_SCORE = 1
MAX_SCORE = 5
DEFAULT_SCORE = 3
