from .comments import compose_comment, describe_error
from .extractor import extract_issue_keys
from .rules import ResolvedTrigger, resolve_rule
from .engine import TriggerEngine, EngineResult, IssueOutcome

__all__ = [
    "compose_comment",
    "describe_error",
    "extract_issue_keys",
    "ResolvedTrigger",
    "resolve_rule",
    "TriggerEngine",
    "EngineResult",
    "IssueOutcome",
]
