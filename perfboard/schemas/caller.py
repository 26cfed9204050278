from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Screen(str, Enum):
    DASHBOARD = "dashboard"
    TEAM = "team"
    EVALUATE = "evaluate"
    ADMIN = "admin"


class Caller(BaseModel):
    """Self-declared identity of the current session"""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    department: str
    is_admin: bool = False


class SessionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    department: str = Field(min_length=1, max_length=200)
    is_admin: bool = False


class SessionOut(BaseModel):
    caller: Caller
    screen: Screen
