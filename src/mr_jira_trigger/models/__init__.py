from .config import MergeRequestState, TriggerConfig, TriggerRule, TriggerSection
from .webhook import GitLabMREvent

__all__ = [
    "MergeRequestState",
    "TriggerConfig",
    "TriggerRule",
    "TriggerSection",
    "GitLabMREvent",
]
