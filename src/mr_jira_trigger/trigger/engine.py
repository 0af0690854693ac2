# src/mr_jira_trigger/trigger/engine.py
import logging
from dataclasses import dataclass, field
import httpx
from mr_jira_trigger.errors import TriggerError
from mr_jira_trigger.models.config import TriggerConfig
from mr_jira_trigger.models.webhook import GitLabMREvent
from mr_jira_trigger.platforms.base import GitPlatform, IssueTracker
from .comments import compose_comment, describe_error
from .extractor import extract_issue_keys
from .rules import resolve_rule


logger = logging.getLogger(__name__)

# Errors from a single Jira or GitLab call; these never abort the issue loop.
CALL_ERRORS = (TriggerError, httpx.HTTPError)


@dataclass
class IssueOutcome:
    """What happened to one issue reference during a delivery."""
    issue_key: str
    transition_id: int | None = None
    transitioned: bool = False
    commented: bool = False
    errors: list[str] = field(default_factory=list)
    notified: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class EngineResult:
    status: str
    reason: str | None = None
    outcomes: list[IssueOutcome] = field(default_factory=list)

    @classmethod
    def skipped(cls, reason: str) -> "EngineResult":
        return cls(status="skipped", reason=reason)


class TriggerEngine:
    def __init__(
        self,
        jira: IssueTracker,
        gitlab: GitPlatform,
        config: TriggerConfig,
        bot_name: str = "MR Jira Trigger",
    ):
        self.jira = jira
        self.gitlab = gitlab
        self.config = config
        self.bot_name = bot_name

    async def handle(self, event: GitLabMREvent) -> EngineResult:
        """Apply the configured trigger rule to every issue named in the MR title.

        Raises UnsupportedStateError for a state with no trigger block.
        """
        attrs = event.object_attributes

        if attrs.work_in_progress:
            logger.info(f"Skip work in progress merge request !{attrs.iid}")
            return EngineResult.skipped("work_in_progress")

        if not event.is_merge_request:
            logger.info(f"Skip {event.object_kind or 'unknown'} event")
            return EngineResult.skipped("not_merge_request")

        resolved = resolve_rule(attrs.state, attrs.action, self.config.trigger)
        if resolved.rule.is_noop:
            logger.info(f'Skip "{attrs.state}" state')
            return EngineResult.skipped("rule_disabled")

        issue_keys = extract_issue_keys(attrs.title, self.config.trigger.regex)
        if not issue_keys:
            logger.info(f"No Jira issue found in title of merge request !{attrs.iid}")
            return EngineResult.skipped("no_issue_keys")

        comment = compose_comment(resolved.rule, event)
        outcomes = []
        for issue_key in issue_keys:
            outcomes.append(
                await self._process_issue(issue_key, resolved.rule.title, comment, resolved.authoritative, event)
            )

        return EngineResult(status="processed", outcomes=outcomes)

    async def _process_issue(
        self,
        issue_key: str,
        transition_title: str,
        comment: str,
        authoritative: bool,
        event: GitLabMREvent,
    ) -> IssueOutcome:
        outcome = IssueOutcome(issue_key=issue_key)

        try:
            outcome.transition_id = await self.jira.find_transition_id(issue_key, transition_title)
        except CALL_ERRORS as e:
            logger.error(f"Transition lookup failed for {issue_key}: {e}")
            await self._report(outcome, e, event)
        else:
            try:
                await self.jira.update_transition(issue_key, outcome.transition_id)
                outcome.transitioned = True
            except CALL_ERRORS as e:
                logger.error(f"Transition update failed for {issue_key}: {e}")
                await self._report(outcome, e, event)

        # Independent of the transition outcome
        if authoritative:
            try:
                await self.jira.add_comment(issue_key, comment)
                outcome.commented = True
            except CALL_ERRORS as e:
                logger.error(f"Adding comment failed for {issue_key}: {e}")
                await self._report(outcome, e, event)

        return outcome

    async def _report(self, outcome: IssueOutcome, error: Exception, event: GitLabMREvent) -> None:
        """Post the error as a note on the originating merge request."""
        outcome.errors.append(str(error))
        attrs = event.object_attributes
        try:
            await self.gitlab.post_note(
                attrs.target_project_id,
                attrs.iid,
                describe_error(error, self.bot_name),
            )
            outcome.notified += 1
        except CALL_ERRORS as e:
            logger.error(f"Failed to post GitLab note for {outcome.issue_key}: {e}")
