import base64
import logging
import httpx
from mr_jira_trigger.errors import (
    IssueNotFoundError,
    NoTransitionSpecifiedError,
    TransitionNotFoundError,
    UnknownResponseError,
)
from .base import IssueTracker


logger = logging.getLogger(__name__)


class JiraClient(IssueTracker):
    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = host.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/2"
        self.username = username
        self.password = password
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        return {"Authorization": "Basic " + base64.b64encode(credentials).decode("ascii")}

    async def aclose(self) -> None:
        await self.client.aclose()

    async def find_transition_id(self, issue_key: str, title: str) -> int:
        """Return the ID of the transition named ``title`` available on the issue."""
        response = await self.client.get(
            f"{self.api_url}/issue/{issue_key}/transitions",
            headers=self._headers(),
        )

        if response.status_code == 200:
            try:
                for transition in response.json().get("transitions") or []:
                    if transition.get("name") == title:
                        transition_id = int(transition["id"])
                        logger.info(
                            f"The issue {issue_key} find transition name {title} with ID {transition_id} successfully"
                        )
                        return transition_id
            except (ValueError, TypeError, AttributeError, KeyError) as e:
                # Not a transitions document, e.g. an SSO login page
                raise UnknownResponseError(response.status_code, response.text) from e
            raise TransitionNotFoundError(issue_key, title)
        if response.status_code == 404:
            raise IssueNotFoundError(
                f"The issue {issue_key} is not found or the user does not have permission to view it",
                issue_key,
            )
        raise UnknownResponseError(response.status_code, response.text)

    async def update_transition(self, issue_key: str, transition_id: int) -> None:
        response = await self.client.post(
            f"{self.api_url}/issue/{issue_key}/transitions",
            headers=self._headers(),
            json={"transition": {"id": transition_id}},
        )

        if response.status_code == 204:
            logger.info(f"The issue {issue_key} transition updated successfully")
            return
        if response.status_code == 400:
            raise NoTransitionSpecifiedError()
        if response.status_code == 404:
            raise IssueNotFoundError(
                f"The issue {issue_key} does not exist or the user does not have permission to view it",
                issue_key,
            )
        raise UnknownResponseError(response.status_code, response.text)

    async def add_comment(self, issue_key: str, comment: str) -> None:
        response = await self.client.post(
            f"{self.api_url}/issue/{issue_key}/comment",
            headers=self._headers(),
            json={"body": comment},
        )

        if response.status_code == 201:
            logger.info(f"The issue {issue_key} added comment successfully")
            return
        raise UnknownResponseError(response.status_code, response.text)
