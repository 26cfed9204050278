from pydantic import BaseModel, ConfigDict, Field


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    position: str = Field(min_length=1, max_length=200)
    department: str | None = Field(default=None, max_length=200)


class EmployeeUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    position: str | None = Field(default=None, min_length=1, max_length=200)
    department: str | None = Field(default=None, min_length=1, max_length=200)


class EmployeeOut(BaseModel):
    id: str
    name: str
    email: str
    position: str
    department: str
    avatar: str


class RosterEntryOut(EmployeeOut):
    """Employee row on the evaluate screen"""
    last_evaluation_date: str | None = None
    evaluation_count: int = 0
