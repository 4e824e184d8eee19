"""Week-by-week similarity of every speaker to the reference speaker."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from .aggregate import RECORD_COLUMNS, check_methods, aggregate_frame
from .errors import EmptyInput
from .load_corpus import group_documents
from .term_matrix import MatrixConfig

logger = logging.getLogger(__name__)

# what to do with a week in which the reference speaker has no document
MISSING_REFERENCE_POLICIES = ('skip', 'null')


def weekly_similarity(records: pd.DataFrame, reference: str, methods: Sequence[str],
                      missing_reference: str, group_key: str = 'speaker',
                      matrix_config: MatrixConfig | None = None,
                      progress: bool = False) -> pd.DataFrame:
    """Aggregate per ISO week; returns columns week, group, score, method.

    `missing_reference` has no default: "skip" leaves such weeks out, "null"
    emits a NaN score for every other speaker of that week and every method.
    """
    if missing_reference not in MISSING_REFERENCE_POLICIES:
        raise ValueError(f'missing_reference must be one of {MISSING_REFERENCE_POLICIES}, got {missing_reference!r}')
    methods = check_methods(methods)
    if 'week' not in records.columns:
        raise EmptyInput('records have no week column; load them with dates')

    dated = records.dropna(subset=['week'])
    frames = []
    weeks = sorted(int(w) for w in dated['week'].unique())
    for week in tqdm(weeks, desc='Weeks', disable=not progress):
        groups = group_documents(dated[dated['week'] == week], group_key=group_key)
        if reference not in groups:
            if missing_reference == 'skip':
                logger.warning('week %d: no document from %r, skipped', week, reference)
                continue
            others = sorted(groups)
            frame = pd.DataFrame({
                'group': [g for _ in methods for g in others],
                'score': np.nan,
                'method': [m for m in methods for _ in others],
            }, columns=RECORD_COLUMNS)
        else:
            frame = aggregate_frame(groups, reference, methods, matrix_config=matrix_config)
        frames.append(frame.assign(week=week))

    if not frames:
        return pd.DataFrame(columns=['week'] + RECORD_COLUMNS)
    return pd.concat(frames, ignore_index=True)[['week'] + RECORD_COLUMNS]
