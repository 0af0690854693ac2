from dataclasses import dataclass
from mr_jira_trigger.errors import UnsupportedStateError
from mr_jira_trigger.models.config import MergeRequestState, TriggerRule, TriggerSection


# Actions that mark the delivery completing the state change, as opposed to
# follow-up deliveries GitLab sends for a merge request already in that state.
AUTHORITATIVE_ACTIONS = {
    MergeRequestState.MERGED: frozenset({"merge"}),
    MergeRequestState.OPENED: frozenset({"open", "reopen"}),
    MergeRequestState.CLOSED: frozenset({"close"}),
    MergeRequestState.LOCKED: frozenset({"lock"}),
}


@dataclass(frozen=True)
class ResolvedTrigger:
    state: MergeRequestState
    rule: TriggerRule
    authoritative: bool


def parse_state(state: str) -> MergeRequestState:
    try:
        return MergeRequestState(state)
    except ValueError:
        raise UnsupportedStateError(state) from None


def resolve_rule(state: str, action: str, trigger: TriggerSection) -> ResolvedTrigger:
    """Pick the configured rule for a merge request state.

    ``authoritative`` only decides whether a Jira comment is added; the
    transition is attempted for every delivery of the state.
    """
    mr_state = parse_state(state)
    return ResolvedTrigger(
        state=mr_state,
        rule=trigger.rule_for(mr_state),
        authoritative=action in AUTHORITATIVE_ACTIONS[mr_state],
    )
