# src/mr_jira_trigger/trigger/extractor.py
import re
from collections.abc import Iterable


def extract_issue_keys(title: str, patterns: Iterable[re.Pattern | str]) -> list[str]:
    """Find Jira issue keys in a merge request title.

    The title is upper-cased first. Each pattern is applied on its own and all
    of its non-overlapping matches are appended, pattern by pattern, so the
    result keeps duplicates and match order. The whole match is the key, even
    when the pattern has groups.
    """
    normalized = title.upper()
    issue_keys: list[str] = []

    for pattern in patterns:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        for match in regex.finditer(normalized):
            if match.group(0):
                issue_keys.append(match.group(0))

    return issue_keys
