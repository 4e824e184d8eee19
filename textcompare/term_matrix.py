"""Build a group x term count matrix with scikit-learn's CountVectorizer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

from .errors import EmptyInput

logger = logging.getLogger(__name__)

# words of two or more characters, punctuation dropped
WORD_PATTERN = r"(?u)\b\w\w+\b"
# single-character words and every punctuation mark kept as its own token
WORD_AND_PUNCT_PATTERN = r"(?u)\b\w+\b|[^\w\s]"


@dataclass
class MatrixConfig:
    remove_stopwords: bool = True
    remove_punctuation: bool = True
    lowercase: bool = True
    min_df: int = 1
    ngram_range: Tuple[int, int] = (1, 1)

    def vectorizer(self) -> CountVectorizer:
        return CountVectorizer(
            token_pattern=WORD_PATTERN if self.remove_punctuation else WORD_AND_PUNCT_PATTERN,
            stop_words='english' if self.remove_stopwords else None,
            lowercase=self.lowercase,
            min_df=self.min_df,
            ngram_range=tuple(self.ngram_range),
        )


@dataclass
class TermMatrix:
    """Term counts, one row per group in `groups`, one column per `vocabulary` entry."""
    counts: sparse.csr_matrix
    groups: List[str]
    vocabulary: np.ndarray

    @property
    def shape(self):
        return self.counts.shape

    def dense(self, binary: bool = False) -> np.ndarray:
        X = self.counts.toarray()
        return X > 0 if binary else X.astype(float)

    def top_terms(self, group: str, n: int = 10) -> List[Tuple[str, int]]:
        row = self.counts[self.groups.index(group)].toarray().ravel()
        top = row.argsort()[::-1][:n]
        return [(str(self.vocabulary[i]), int(row[i])) for i in top if row[i] > 0]


def build_term_matrix(document_groups: Dict[str, str], config: MatrixConfig | None = None) -> TermMatrix:
    """Count terms per group; every group must keep at least one term."""
    if not document_groups:
        raise EmptyInput('no document groups')
    config = config or MatrixConfig()
    groups = list(document_groups)
    vectorizer = config.vectorizer()
    try:
        counts = vectorizer.fit_transform([document_groups[g] for g in groups])
    except ValueError as e:
        # sklearn raises on an empty vocabulary (only stopwords, or all pruned by min_df)
        raise EmptyInput(f'no terms left after tokenisation: {e}') from e
    # an all-zero row has no defined cosine or correlation with anything
    empty = [g for g, total in zip(groups, np.asarray(counts.sum(axis=1)).ravel()) if total == 0]
    if empty:
        raise EmptyInput(f'no terms left after tokenisation for: {", ".join(empty)}')
    logger.info('term matrix: %d groups x %d terms', counts.shape[0], counts.shape[1])
    return TermMatrix(counts=sparse.csr_matrix(counts), groups=groups,
                      vocabulary=vectorizer.get_feature_names_out())
