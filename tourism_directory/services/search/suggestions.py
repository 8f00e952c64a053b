from typing import Iterable, Optional

from tourism_directory.store.criteria import contains_ci


def collect_suggestions(
    value_lists: Iterable[list[Optional[str]]], text: str, limit: int
) -> list[str]:
    """Distinct field values containing ``text``, in first-seen order, capped at ``limit``."""
    seen: set[str] = set()
    out: list[str] = []
    for values in value_lists:
        for v in values:
            if not v or v in seen or not contains_ci(v, text):
                continue
            seen.add(v)
            out.append(v)
            if len(out) >= limit:
                return out
    return out
