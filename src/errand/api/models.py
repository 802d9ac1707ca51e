import enum
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, enum.Enum):
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


class Task(BaseModel):
    """
    Canonical task schema.

    The backend has been seen sending both `ID`/`Title`/`Status` and
    `ID`/`title`/`status`, so every field accepts either casing on input.
    Python code only ever reads the lowercase attributes.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(validation_alias=AliasChoices("ID", "id", "Id"))
    title: str = Field(min_length=1, validation_alias=AliasChoices("Title", "title"))
    status: TaskStatus = Field(
        default=TaskStatus.INCOMPLETE,
        validation_alias=AliasChoices("Status", "status"),
    )
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("CreatedAt", "created_at")
    )
    updated_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("UpdatedAt", "updated_at")
    )

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value):
        if value is None or value == "":
            return TaskStatus.INCOMPLETE
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_complete(self) -> bool:
        return self.status == TaskStatus.COMPLETE


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
