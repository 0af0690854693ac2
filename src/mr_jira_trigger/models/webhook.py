from pydantic import BaseModel, ConfigDict, Field


class GitLabUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    username: str | None = None


class GitLabTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    web_url: str = ""


class GitLabMergeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    iid: int = 0
    title: str = ""
    state: str = ""
    action: str = ""
    description: str | None = None
    updated_at: str = ""
    target_project_id: int = 0
    work_in_progress: bool = False
    target: GitLabTarget = Field(default_factory=GitLabTarget)


class GitLabMREvent(BaseModel):
    """Merge request webhook payload.

    Every field defaults to its zero value so that events of any kind decode;
    only malformed JSON or mismatched types are rejected.
    """

    model_config = ConfigDict(frozen=True)

    object_kind: str = ""  # "merge_request"
    user: GitLabUser = Field(default_factory=GitLabUser)
    object_attributes: GitLabMergeRequest = Field(default_factory=GitLabMergeRequest)

    @property
    def is_merge_request(self) -> bool:
        return self.object_kind == "merge_request"

    @property
    def merge_request_url(self) -> str:
        return f"{self.object_attributes.target.web_url}/merge_requests/{self.object_attributes.iid}"
