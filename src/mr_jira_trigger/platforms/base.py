from abc import ABC, abstractmethod


class IssueTracker(ABC):
    @abstractmethod
    async def find_transition_id(self, issue_key: str, title: str) -> int:
        pass

    @abstractmethod
    async def update_transition(self, issue_key: str, transition_id: int) -> None:
        pass

    @abstractmethod
    async def add_comment(self, issue_key: str, comment: str) -> None:
        pass


class GitPlatform(ABC):
    @abstractmethod
    async def post_note(
        self,
        project_id: int,
        mr_iid: int,
        comment: str,
    ) -> None:
        pass
