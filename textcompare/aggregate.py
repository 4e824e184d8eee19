"""
aggregate.py

Compare every group against one reference group with several similarity or
distance methods, and stack the results into one long table:

    group   score   method
    bob     0.41    cosine
    carol   0.37    cosine
    bob     0.22    correlation
    ...

The reference group is looked up by label in each method's matrix, never by
row position, and its self-comparison is dropped. With N groups and M methods
the table has (N - 1) * M rows.

`collect_by_method` is the per-method loop shared with readability scoring.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import pandas as pd

from .comparison import compare as compare_matrix
from .errors import ComparisonError, EmptyInput, MissingReferenceGroup
from .term_matrix import MatrixConfig, TermMatrix, build_term_matrix

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ['group', 'score', 'method']


@dataclass(frozen=True)
class ComparisonRecord:
    group: str
    score: float
    method: str


def check_methods(methods: Sequence[str]) -> List[str]:
    methods = list(methods)
    if not methods:
        raise EmptyInput('no methods given')
    dupes = sorted({m for m in methods if methods.count(m) > 1})
    if dupes:
        raise ComparisonError(f'duplicate methods: {", ".join(dupes)}')
    return methods


def collect_by_method(methods: Sequence[str], compute: Callable[[str], pd.DataFrame]) -> pd.DataFrame:
    """Call `compute(method)` for each method, tag each frame with a `method` column, concatenate.

    Frames are concatenated method-major in the order given.
    """
    frames = []
    for method in check_methods(methods):
        frame = compute(method)
        frames.append(frame.assign(method=method))
    return pd.concat(frames, ignore_index=True)


def reference_scores(matrix: pd.DataFrame, reference: str) -> pd.DataFrame:
    """The reference group's row of a comparison matrix, without the self-comparison."""
    if reference not in matrix.index:
        raise MissingReferenceGroup(reference, matrix.index)
    row = matrix.loc[reference].drop(labels=reference)
    return pd.DataFrame({'group': row.index.astype(str), 'score': row.to_numpy(dtype=float)})


def aggregate_frame(document_groups: Dict[str, str], reference: str, methods: Sequence[str],
                    compare: Callable | None = None,
                    matrix_config: MatrixConfig | None = None,
                    term_matrix: TermMatrix | None = None) -> pd.DataFrame:
    """Long-format table of scores of every non-reference group against `reference`.

    Parameters
    ----------
    document_groups:
        Mapping group label -> concatenated text. Must contain `reference`.
    reference:
        Label of the group everything is compared against.
    methods:
        Distinct method names understood by `compare`.
    compare:
        Callable `(term_matrix, method) -> square DataFrame`. Defaults to
        `textcompare.comparison.compare`.
    matrix_config:
        Tokenisation options for the term matrix.
    term_matrix:
        A matrix already built from `document_groups`; built here when omitted.

    Raises
    ------
    EmptyInput
        `document_groups` or `methods` is empty.
    MissingReferenceGroup
        `reference` is not a group label.
    UnknownMethod
        `compare` does not know a method name.
    """
    if not document_groups:
        raise EmptyInput('no document groups')
    methods = check_methods(methods)
    if reference not in document_groups:
        raise MissingReferenceGroup(reference, document_groups)

    compare = compare or compare_matrix
    if term_matrix is None:
        term_matrix = build_term_matrix(document_groups, matrix_config)

    def one_method(method):
        logger.info('comparing %d groups against %r with %s', len(document_groups), reference, method)
        return reference_scores(compare(term_matrix, method), reference)

    return collect_by_method(methods, one_method)[RECORD_COLUMNS]


def aggregate(document_groups: Dict[str, str], reference: str, methods: Sequence[str],
              compare: Callable | None = None,
              matrix_config: MatrixConfig | None = None,
              term_matrix: TermMatrix | None = None) -> List[ComparisonRecord]:
    """Same as `aggregate_frame`, as a list of ComparisonRecord."""
    frame = aggregate_frame(document_groups, reference, methods, compare=compare, matrix_config=matrix_config,
                            term_matrix=term_matrix)
    return [ComparisonRecord(r.group, float(r.score), r.method) for r in frame.itertuples(index=False)]


def records_to_frame(records: Sequence[ComparisonRecord]) -> pd.DataFrame:
    return pd.DataFrame([(r.group, r.score, r.method) for r in records], columns=RECORD_COLUMNS)


def order_groups_by_mean(frame: pd.DataFrame, ascending: bool = False) -> List[str]:
    """Group labels sorted by their mean score across methods."""
    if frame.empty:
        return []
    means = frame.groupby('group')['score'].mean()
    return means.sort_values(ascending=ascending, kind='stable').index.tolist()
