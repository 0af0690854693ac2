import logging
import httpx
from mr_jira_trigger.errors import GitLabError
from .base import GitPlatform


logger = logging.getLogger(__name__)


class GitLabClient(GitPlatform):
    def __init__(
        self,
        token: str,
        base_url: str = "https://gitlab.com",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api/v4"
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {"Private-Token": self.token}

    async def aclose(self) -> None:
        await self.client.aclose()

    async def post_note(
        self,
        project_id: int,
        mr_iid: int,
        comment: str,
    ) -> None:
        """Add a note to the merge request, sent form-encoded."""
        response = await self.client.post(
            f"{self.api_url}/projects/{project_id}/merge_requests/{mr_iid}/notes",
            headers=self._headers(),
            data={"body": comment},
        )

        if response.status_code == 201:
            logger.info(f"The GitLab project {project_id} with merge request {mr_iid} added comment successfully")
            return
        raise GitLabError(response.status_code, response.text)
