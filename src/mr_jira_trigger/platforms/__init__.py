# src/mr_jira_trigger/platforms/__init__.py
from .base import GitPlatform, IssueTracker
from .gitlab import GitLabClient
from .jira import JiraClient

__all__ = ["GitPlatform", "IssueTracker", "GitLabClient", "JiraClient"]
