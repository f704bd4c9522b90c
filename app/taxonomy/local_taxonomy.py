from __future__ import annotations

import json
from pathlib import Path

from app.normalize.utils import normalize_token

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(
        self,
        synonyms_path: str | Path | None = None,
        vocabulary_path: str | Path | None = None,
    ) -> None:
        synonyms = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        vocabulary = Path(vocabulary_path) if vocabulary_path else Path(__file__).with_name("skills_vocabulary.json")
        self._synonyms = self._load_synonyms(synonyms)
        self._vocabulary = self._load_vocabulary(vocabulary)

    @staticmethod
    def _load_synonyms(path: Path) -> dict[str, str]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        synonyms: dict[str, str] = {}
        for key, value in raw.items():
            normalized = normalize_token(str(key))
            if not normalized:
                continue
            existing = synonyms.get(normalized)
            if existing is not None and existing != value:
                raise RuntimeError(
                    f"Synonym '{key}' in '{path}' maps to both '{existing}' and '{value}' after normalization."
                )
            synonyms[normalized] = str(value)
        return synonyms

    @staticmethod
    def _load_vocabulary(path: Path) -> tuple[str, ...]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        terms: list[str] = []
        for group in raw.values():
            for term in group:
                cleaned = str(term).strip().lower()
                if cleaned and cleaned not in terms:
                    terms.append(cleaned)
        return tuple(terms)

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = normalize_token(raw)
        canonical_skill_id = self._synonyms.get(normalized)
        return normalized, canonical_skill_id

    def skill_vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary
