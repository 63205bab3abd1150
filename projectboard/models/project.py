# projectboard/models/project.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase (studentName, createdAt, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Urgency(str, Enum):
    normal = "normal"
    urgent = "urgent"


class ProjectBase(CamelModel):
    title: str = ""
    description: str = ""
    category: str = ""
    skills: List[str] = Field(default_factory=list)
    urgency: Urgency = Urgency.normal
    student_name: str = ""
    contact_info: str = ""
    image_url: Optional[str] = None
    deadline: Optional[datetime] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(CamelModel):
    # only fields present in the request body are merged
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    skills: Optional[List[str]] = None
    urgency: Optional[Urgency] = None
    student_name: Optional[str] = None
    contact_info: Optional[str] = None
    image_url: Optional[str] = None
    deadline: Optional[datetime] = None

    @field_validator(
        "title", "description", "category", "skills", "urgency", "student_name", "contact_info"
    )
    @classmethod
    def _not_null(cls, value):
        # only imageUrl and deadline can be cleared
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class Project(ProjectBase):
    id: str
    created_at: datetime
    updated_at: datetime


class ProjectFilter(BaseModel):
    """
    The four list criteria. ``"all"`` (or an empty value) disables a criterion.
    """
    search: Optional[str] = None
    category: Optional[str] = "all"
    skill: Optional[str] = "all"
    urgency: Optional[str] = "all"


class DeleteResponse(BaseModel):
    message: str


class SweepResponse(BaseModel):
    deleted: List[str]
    count: int
