from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List


class Repository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    full_name: str


class Pusher(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class Commit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    added: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)

    @field_validator("added", "modified", "removed", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        # GitHub omits these lists on some commits; null means the same thing
        return [] if value is None else value


class PushEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ref: str
    repository: Repository
    pusher: Pusher
    commits: List[Commit] = Field(default_factory=list)
