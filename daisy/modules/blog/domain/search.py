# 📄 File: daisy/modules/blog/domain/search.py
# 🧭 Purpose (Layman Explanation):
# Finds blog posts about the plants or symptoms a person types, so "rosa"
# finds posts tagged "Rosa" and "cafe" finds posts tagged "café".
# 🧪 Purpose (Technical Summary):
# Client-side filter over a full BlogEntry listing. Keywords and tags are
# lowercased and accent-stripped; listing order is preserved.
# 🔗 Dependencies:
# daisy.shared.utils.helpers (keyword normalization)
# 🔄 Connected Modules / Calls From:
# RemoteGateway.list_documents_with_filter

"""
Client-side keyword search over blog entries.

A keyword matches an entry when it is a substring of one of the entry's
plant or symptom tags, ignoring case and accents.
"""

from typing import Iterable, List

from daisy.shared.utils.helpers import normalize_keyword
from daisy.shared.utils.logging import get_logger

from .models import BlogEntry

logger = get_logger(__name__)


def extract_keywords(filter_text: str) -> List[str]:
    """
    Split a free-text filter into normalized keywords.

    An all-whitespace filter gives ``[""]``; the empty keyword matches
    every entry.
    """
    keywords = filter_text.strip().split()
    if not keywords:
        logger.debug("Empty search filter, every entry will match")
        return [""]
    return [normalize_keyword(keyword) for keyword in keywords]


def _normalized_tags(tags: Iterable[str]) -> List[str]:
    return [normalize_keyword(tag.strip()) for tag in tags]


def entry_matches(entry: BlogEntry, keywords: List[str]) -> bool:
    plants = _normalized_tags(entry.plants)
    symptoms = _normalized_tags(entry.symptoms)

    return any(
        keyword in tag
        for keyword in keywords
        for tag in plants + symptoms
    )


def search_entries(filter_text: str, entries: Iterable[BlogEntry]) -> List[BlogEntry]:
    """
    Filter blog entries by plant/symptom keywords.

    Args:
        filter_text: Whitespace separated keywords
        entries: Full listing to filter

    Returns:
        List[BlogEntry]: Matching entries in their original order
    """
    keywords = extract_keywords(filter_text)
    matches = [entry for entry in entries if entry_matches(entry, keywords)]
    logger.debug(
        f"Search matched {len(matches)} entries",
        extra={"keywords": keywords}
    )
    return matches
