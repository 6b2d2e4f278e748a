from pydantic import BaseModel, ConfigDict
from typing import List, Literal, Union


class InterestFlags(BaseModel):
    """Which categories of files a push touched. Flags are independent."""
    model_config = ConfigDict(frozen=True)

    frontend_asset: bool = False
    dependency_manifest: bool = False
    config_file: bool = False
    container_file: bool = False


class Unauthorized(BaseModel):
    kind: Literal["unauthorized"] = "unauthorized"


class BadPayload(BaseModel):
    kind: Literal["bad_payload"] = "bad_payload"
    reason: str = ""


class Ignored(BaseModel):
    kind: Literal["ignored"] = "ignored"
    event_type: str


class Processed(BaseModel):
    kind: Literal["processed"] = "processed"
    repository: str
    branch: str
    pusher: str
    commit_count: int
    changed_files: List[str]
    interest_flags: InterestFlags


class Fault(BaseModel):
    kind: Literal["fault"] = "fault"


WebhookResult = Union[Unauthorized, BadPayload, Ignored, Processed, Fault]
