# src/mr_jira_trigger/errors.py


class TriggerError(Exception):
    """Base class for all errors raised by mr-jira-trigger."""


class ConfigError(TriggerError):
    def __init__(self, context: str, error: Exception | str):
        self.context = context
        self.error = error
        super().__init__(f"{context}: [{error}]")


class UnsupportedStateError(TriggerError):
    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Not support state error: [{state}]")


class UnknownResponseError(TriggerError):
    """Raised when Jira or GitLab answers with a status code we do not handle."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Unknown: {body}")


class JiraError(TriggerError):
    pass


class TransitionNotFoundError(JiraError):
    def __init__(self, issue_key: str, title: str):
        self.issue_key = issue_key
        self.title = title
        super().__init__(f'The transition name "{title}" in issue {issue_key} not found')


class IssueNotFoundError(JiraError):
    def __init__(self, message: str, issue_key: str):
        self.issue_key = issue_key
        super().__init__(message)


class NoTransitionSpecifiedError(JiraError):
    def __init__(self):
        super().__init__("There is no transition specified")


class GitLabError(UnknownResponseError):
    """Raised when GitLab rejects a merge request note."""
