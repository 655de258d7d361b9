"""Lookup tables between Azure DevOps numeric enums and their names.

The REST API and older SDKs report pull request state as integers while the
Python SDK deserializes the same fields as strings. Both forms are accepted
here so that tool output always carries the readable name.
"""

from typing import Any, Dict, Optional


class EnumTable:
    """Bidirectional mapping between enum values and names.

    Args:
        name: Name of the Azure DevOps enum, used in error messages
        members: Mapping of numeric value to name
        missing: Name returned by ``to_text`` when the value is ``None``
    """

    def __init__(self, name: str, members: Dict[int, str], missing: Optional[str] = None) -> None:
        self.name = name
        self._by_value = dict(members)
        self._by_name = {text: value for value, text in members.items()}
        self._by_lower_name = {text.lower(): text for text in members.values()}
        self.missing = missing

    @property
    def names(self) -> tuple:
        return tuple(self._by_value.values())

    def to_text(self, value: Any) -> str:
        """Return the readable name for ``value``.

        Unrecognized values come back as ``unknown(<value>)``.
        """
        if value is None and self.missing is not None:
            return self.missing
        if isinstance(value, str):
            if value in self._by_name:
                return value
            stripped = value.strip()
            if stripped.lstrip('-').isdigit():
                value = int(stripped)
        if isinstance(value, int) and not isinstance(value, bool) and value in self._by_value:
            return self._by_value[value]
        return f'unknown({value})'

    def to_value(self, text: Optional[str], default: Optional[int] = None) -> Optional[int]:
        """Return the numeric value for a name (case-insensitive), or ``default``."""
        if text is None:
            return default
        canonical = self._by_lower_name.get(text.strip().lower())
        if canonical is None:
            return default
        return self._by_name[canonical]

    def canonical_name(self, text: Optional[str], default: Optional[str] = None) -> Optional[str]:
        """Normalize the casing of a member name, falling back to ``default``."""
        value = self.to_value(text)
        if value is None:
            return default
        return self._by_value[value]

    def __contains__(self, item: Any) -> bool:
        return not self.to_text(item).startswith('unknown(')

    def __repr__(self) -> str:
        return f'EnumTable({self.name!r}, {self._by_value!r})'


PULL_REQUEST_STATUS = EnumTable(
    'PullRequestStatus',
    {0: 'notSet', 1: 'active', 2: 'abandoned', 3: 'completed'},
    missing='notSet',
)

MERGE_STATUS = EnumTable(
    'PullRequestAsyncStatus',
    {1: 'conflicts', 2: 'failure', 3: 'notSet', 4: 'queued', 5: 'rejectedByPolicy', 6: 'succeeded'},
    missing='notSet',
)

MERGE_STRATEGY = EnumTable(
    'GitPullRequestMergeStrategy',
    {1: 'noFastForward', 2: 'rebase', 3: 'rebaseMerge', 4: 'squash'},
)

DEFAULT_MERGE_STRATEGY = 'noFastForward'

# Comment thread and comment type values used when posting review comments.
COMMENT_THREAD_STATUS = EnumTable(
    'CommentThreadStatus',
    {0: 'unknown', 1: 'active', 2: 'fixed', 3: 'wontFix', 4: 'closed', 5: 'byDesign', 6: 'pending'},
)

COMMENT_TYPE = EnumTable(
    'CommentType',
    {0: 'unknown', 1: 'text', 2: 'codeChange', 3: 'system'},
)
