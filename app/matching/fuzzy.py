from __future__ import annotations

from typing import Iterable

from app.normalize.utils import normalize_token
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider


def tokens_match(left: str, right: str, taxonomy: TaxonomyProvider | None = None) -> bool:
    """Symmetric fuzzy equivalence: equal, one contains the other, or a shared synonym group."""
    provider = taxonomy or get_default_taxonomy_provider()
    left_normalized, left_group = provider.normalize_skill(left)
    right_normalized, right_group = provider.normalize_skill(right)
    if not left_normalized or not right_normalized:
        return False
    if left_normalized in right_normalized or right_normalized in left_normalized:
        return True
    return left_group is not None and left_group == right_group


def split_matches(
    candidates: Iterable[str],
    required: Iterable[str],
    taxonomy: TaxonomyProvider | None = None,
) -> tuple[list[str], list[str]]:
    """Partition required tokens into (matched, missing); one candidate may satisfy many requirements."""
    pool = [candidate for candidate in candidates if normalize_token(candidate)]
    matched: list[str] = []
    missing: list[str] = []
    for token in required:
        if any(tokens_match(candidate, token, taxonomy) for candidate in pool):
            matched.append(token)
        else:
            missing.append(token)
    return matched, missing
