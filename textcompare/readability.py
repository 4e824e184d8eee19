"""
readability.py

Readability scores per document (textstat) and per-speaker summaries with
t-based confidence intervals.

Usage:
    python -m textcompare.readability --input data/speeches.csv --methods flesch_kincaid,gunning_fog --out data/analysis
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
import textstat
from scipy import stats

from .aggregate import collect_by_method
from .errors import UnknownMethod

logger = logging.getLogger(__name__)

# method name -> textstat function name
READABILITY_METHODS = {
    'flesch': 'flesch_reading_ease',
    'flesch_kincaid': 'flesch_kincaid_grade',
    'gunning_fog': 'gunning_fog',
    'smog': 'smog_index',
    'ari': 'automated_readability_index',
    'coleman_liau': 'coleman_liau_index',
    'dale_chall': 'dale_chall_readability_score',
    'linsear_write': 'linsear_write_formula',
}

SUMMARY_COLUMNS = ['speaker', 'method', 'mean', 'standard_deviation', 'sample_size',
                   'standard_error', 'confidence_lower', 'confidence_upper']


def score(text: str, method: str) -> float:
    if method not in READABILITY_METHODS:
        raise UnknownMethod(method, READABILITY_METHODS)
    return float(getattr(textstat, READABILITY_METHODS[method])(text))


def score_documents(records: pd.DataFrame, methods: Sequence[str], group_key: str = 'speaker') -> pd.DataFrame:
    """One row per document and method: group_key, [date, week,] method, score."""
    for m in methods:
        if m not in READABILITY_METHODS:
            raise UnknownMethod(m, READABILITY_METHODS)
    keep = [c for c in (group_key, 'date', 'week') if c in records.columns]

    def one_method(method):
        logger.info('scoring %d documents with %s', len(records), method)
        scores = records['text'].map(lambda t: score(t, method))
        return records[keep].assign(score=scores.astype(float))

    return collect_by_method(methods, one_method)[keep + ['method', 'score']]


def summarize_scores(scores: pd.DataFrame, group_key: str = 'speaker', confidence: float = 0.95) -> pd.DataFrame:
    """Mean, sd, n, standard error and confidence interval per group and method."""
    g = scores.groupby([group_key, 'method'], sort=True)['score']
    summary = g.agg(mean='mean', standard_deviation='std', sample_size='count').reset_index()
    n = summary['sample_size'].astype(float)
    summary['standard_error'] = summary['standard_deviation'] / np.sqrt(n)
    # t quantile is NaN for a single observation, which propagates to the interval
    tq = stats.t.ppf((1 + confidence) / 2, np.where(n > 1, n - 1, np.nan))
    half = tq * summary['standard_error']
    summary['confidence_lower'] = summary['mean'] - half
    summary['confidence_upper'] = summary['mean'] + half
    summary = summary.rename(columns={group_key: 'speaker'})
    return summary[SUMMARY_COLUMNS]


def main(argv=None):
    from .load_corpus import load_records

    parser = argparse.ArgumentParser(description='Readability scores per document and speaker')
    parser.add_argument('--input', required=True)
    parser.add_argument('--methods', default='flesch_kincaid,gunning_fog,smog,ari')
    parser.add_argument('--group-key', default='speaker')
    parser.add_argument('--confidence', type=float, default=0.95)
    parser.add_argument('--out', default='data/analysis')
    args = parser.parse_args(argv)

    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    records = load_records(args.input)
    scores = score_documents(records, args.methods.split(','), group_key=args.group_key)
    summary = summarize_scores(scores, group_key=args.group_key, confidence=args.confidence)
    scores.to_csv(out / 'readability_scores.csv', index=False)
    summary.to_csv(out / 'readability_summary.csv', index=False)
    print('Wrote', out / 'readability_scores.csv')
    print('Wrote', out / 'readability_summary.csv')


if __name__ == '__main__':
    main()
