"""
Label helpers.

Every function returns a fresh dict so that DTOs built from the result never
alias caller-owned mappings.
"""

from typing import Dict, Mapping, Optional

# Label under which a caller may force the entry level into the stream labels
LOG_LEVEL_FORCED_LABEL = "logLevel"


def copy_labels(src: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Independent copy of a label mapping.

    None is treated as an empty mapping, the result is always a dict.
    """
    return dict(src) if src else {}


def copy_and_merge_labels(*srcs: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Union of all mappings applied left to right; on collision the later
    source wins. Inputs are never mutated.

    Example:
        >>> copy_and_merge_labels({"app": "api", "env": "dev"}, {"env": "prod"})
        {'app': 'api', 'env': 'prod'}
    """
    dst: Dict[str, str] = {}
    for src in srcs:
        if src:
            dst.update(src)
    return dst


def with_level_label(labels: Optional[Mapping[str, str]], level) -> Dict[str, str]:
    """Copy of labels with the level name forced under LOG_LEVEL_FORCED_LABEL."""
    return copy_and_merge_labels(labels, {LOG_LEVEL_FORCED_LABEL: str(level)})
