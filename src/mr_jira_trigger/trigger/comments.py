from mr_jira_trigger.models.config import TriggerRule
from mr_jira_trigger.models.webhook import GitLabMREvent


def compose_comment(rule: TriggerRule, event: GitLabMREvent) -> str:
    """Build the Jira comment: template, then URL, date and author lines."""
    comment = rule.message

    if rule.url:
        comment += f"\nGitLab URL: {event.merge_request_url}"
    if rule.date:
        comment += f"\nAt: {event.object_attributes.updated_at}"
    if rule.username:
        comment += f"\nBy: {event.user.name}"

    return comment


def describe_error(error: Exception, bot_name: str = "MR Jira Trigger") -> str:
    """Format an error as the body of a merge request note."""
    return f"❌ **{bot_name}** ❌<br>{error}"
