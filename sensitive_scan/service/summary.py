# sensitive_scan/service/summary.py

"""Human-readable summary of scan matches for end users."""

from typing import Dict, List, Optional, Sequence

from sensitive_scan.core.definitions import Category, Severity
from sensitive_scan.core.domain import SensitiveMatch
from sensitive_scan.core.loader import PatternLoader


def _labels_by_severity(matches: List[SensitiveMatch]) -> List[str]:
    """Distinct labels, most severe first, then in first-seen order."""
    first_seen: Dict[str, int] = {}
    rank: Dict[str, int] = {}
    for position, m in enumerate(matches):
        first_seen.setdefault(m.label, position)
        rank[m.label] = max(rank.get(m.label, 0), Severity.rank(m.severity))
    return sorted(first_seen, key=lambda label: (-rank[label], first_seen[label]))


def get_scan_summary(
    matches: Sequence[SensitiveMatch], loader: Optional[PatternLoader] = None
) -> str:
    """Renders matches grouped by category with the compliance notice.

    Only labels appear in the summary, never matched values.

    Args:
        matches: Matches from any scan
        loader: Source of summary text (the packaged one by default)

    Returns:
        Summary text, or "" when there are no matches
    """
    if not matches:
        return ""

    config = (loader or PatternLoader.get_instance()).get_summary_config()
    headings = config.get("category_headings", {})

    by_category: Dict[str, List[SensitiveMatch]] = {}
    for m in matches:
        by_category.setdefault(m.category, []).append(m)

    parts = []
    for category in Category.ORDER:
        items = by_category.get(category)
        if not items:
            continue
        heading = headings.get(category, category)
        parts.append(f"{heading}: {', '.join(_labels_by_severity(items))}")

    return f"{config.get('header', '')}\n\n" + "\n".join(parts) + f"\n\n{config.get('notice', '')}"
