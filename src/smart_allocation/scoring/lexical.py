"""Corpus-weighted lexical similarity over free-text skill lists.

Terms are weighted by ``ln(N / (df + 1))`` where ``N`` is the corpus size and
``df`` the number of corpus blobs containing the term. Terms absent from the
corpus carry no weight.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smart_allocation.models.candidate import Candidate
    from smart_allocation.models.opportunity import Opportunity

logger = logging.getLogger(__name__)

# Added to the cosine denominator so all-zero vectors give 0, not NaN
EPSILON = 1e-8

_TOKEN_SPLIT = re.compile(r"[\W_]+")


def tokenize(text: str) -> list[str]:
    """Lower-case ``text`` and split it on runs of non-alphanumeric characters."""
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


class LexicalIndex:
    """Read-only term statistics for one matching run."""

    def __init__(self, idf: Mapping[str, float], size: int) -> None:
        self._idf = MappingProxyType(dict(idf))
        self.size = size

    @classmethod
    def build(cls, corpus: Sequence[str]) -> LexicalIndex:
        """Compute IDF weights for every distinct term in ``corpus``."""
        doc_freq: Counter[str] = Counter()
        for blob in corpus:
            doc_freq.update(set(tokenize(blob)))

        n_docs = len(corpus)
        idf = {term: math.log(n_docs / (df + 1)) for term, df in doc_freq.items()}

        logger.info(f"Built lexical index: {n_docs} documents, {len(idf)} terms")
        return cls(idf, n_docs)

    @classmethod
    def from_pool(
        cls,
        candidates: Iterable[Candidate],
        opportunities: Iterable[Opportunity],
    ) -> LexicalIndex:
        """Build the index from candidate skills followed by opportunity requirements."""
        corpus = [c.skill_text for c in candidates]
        corpus.extend(o.skill_text for o in opportunities)
        return cls.build(corpus)

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self._idf)

    def idf(self, term: str) -> float:
        """IDF weight of ``term`` (0.0 when unknown to the corpus)."""
        return self._idf.get(term, 0.0)

    def vectorize(self, text: str) -> dict[str, float]:
        """Sparse TF-IDF vector of ``text``; unknown terms are dropped."""
        counts = Counter(tokenize(text))
        return {
            term: count * self._idf[term] for term, count in counts.items() if term in self._idf
        }

    def similarity(self, text_a: str, text_b: str) -> float:
        """Cosine similarity between the TF-IDF vectors of two texts."""
        vec_a = self.vectorize(text_a)
        vec_b = self.vectorize(text_b)

        dot = 0.0
        mag_a = 0.0
        mag_b = 0.0
        # Sorted so the summation order, and thus the result, is symmetric
        for term in sorted(vec_a.keys() | vec_b.keys()):
            val_a = vec_a.get(term, 0.0)
            val_b = vec_b.get(term, 0.0)
            dot += val_a * val_b
            mag_a += val_a * val_a
            mag_b += val_b * val_b

        return dot / (math.sqrt(mag_a) * math.sqrt(mag_b) + EPSILON)
