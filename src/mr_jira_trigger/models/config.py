import re
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MergeRequestState(str, Enum):
    OPENED = "opened"
    MERGED = "merged"
    CLOSED = "closed"
    LOCKED = "locked"


class TriggerRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    message: str = ""
    url: bool = False
    date: bool = False
    username: bool = False

    @property
    def is_noop(self) -> bool:
        return not (self.title or self.message or self.url or self.date or self.username)


class GitLabSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    token: str = Field(min_length=1)


class JiraSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ServerSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    port: int = Field(gt=0, lt=65536)
    path: str = Field(min_length=1)

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"


class TriggerSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    regex: tuple[re.Pattern, ...] = ()
    merged: TriggerRule = Field(default_factory=TriggerRule)
    opened: TriggerRule = Field(default_factory=TriggerRule)
    closed: TriggerRule = Field(default_factory=TriggerRule)
    locked: TriggerRule = Field(default_factory=TriggerRule)

    @field_validator("regex", mode="before")
    @classmethod
    def compile_patterns(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"Invalid regex list {v!r}: expected a list of strings")
        patterns = []
        for pattern in v:
            if not isinstance(pattern, (str, re.Pattern)):
                raise ValueError(f"Invalid regex {pattern!r}: expected a string")
            try:
                patterns.append(re.compile(pattern))
            except re.error as e:
                raise ValueError(f"Invalid regex {pattern!r}: {e}") from e
        return tuple(patterns)

    @field_validator("merged", "opened", "closed", "locked", mode="before")
    @classmethod
    def empty_rule(cls, v):
        return {} if v is None else v

    def rule_for(self, state: MergeRequestState) -> TriggerRule:
        return getattr(self, state.value)


class TriggerConfig(BaseModel):
    """Validated contents of config.yml."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gitlab: GitLabSection = Field(alias="GitLab")
    jira: JiraSection = Field(alias="Jira")
    server: ServerSection = Field(alias="Server")
    trigger: TriggerSection = Field(alias="Trigger", default_factory=TriggerSection)

    @field_validator("trigger", mode="before")
    @classmethod
    def empty_trigger(cls, v):
        return {} if v is None else v
