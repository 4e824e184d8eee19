#!/usr/bin/env python3
"""Compare speakers against a reference speaker and measure readability.

Reads records (speaker/author, text, date) from a CSV/JSON file, URL, or a
directory of speaker folders, then:

 - similarity and distance of every speaker to `--reference` (one row per speaker and method)
 - readability scores per document and a per-speaker summary with confidence intervals
 - optionally, week-by-week similarity to the reference

Usage:
  python -m textcompare.compare_texts --input data/speeches.csv --reference "Prime Minister" --out data/analysis

Produces (in --out):
 - similarity.csv, distance.csv
 - readability_scores.csv, readability_summary.csv
 - weekly_similarity.csv  (with --weekly-policy)
 - summary.json  (rankings, top terms per group, readability means)
 - similarity.png, distance.png, readability_summary.png, boxplot_<method>.png

A JSON file passed with --config may set any of: reference, similarity,
distance, readability, group_key, remove_stopwords, remove_punctuation,
min_df, weekly_policy, confidence. Command-line flags win over the file.
"""
import argparse
import json
import logging
from pathlib import Path

from .aggregate import aggregate_frame, order_groups_by_mean
from .comparison import compare
from .load_corpus import group_documents, load_directory, load_records
from .plots import plot_comparison, plot_matrix_heatmap, plot_readability_boxplot, plot_readability_summary
from .readability import score_documents, summarize_scores
from .term_matrix import MatrixConfig, build_term_matrix
from .weekly import MISSING_REFERENCE_POLICIES, weekly_similarity

DEFAULTS = {
    'reference': None,
    'similarity': 'correlation,cosine,jaccard',
    'distance': 'euclidean,manhattan',
    'readability': 'flesch_kincaid,gunning_fog,smog,ari',
    'group_key': 'speaker',
    'remove_stopwords': True,
    'remove_punctuation': True,
    'min_df': 1,
    'weekly_policy': None,
    'confidence': 0.95,
}


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Similarity, distance and readability of speakers vs a reference speaker')
    p.add_argument('--input', required=True, help='CSV/JSON file, URL, or directory of speaker folders')
    p.add_argument('--out', default='data/analysis', help='Output directory')
    p.add_argument('--config', default=None, help='Optional JSON file with defaults')
    p.add_argument('--reference', default=None, help='Reference speaker (required here or in --config)')
    p.add_argument('--similarity', default=None, help=f'Comma-separated similarity methods (default: {DEFAULTS["similarity"]})')
    p.add_argument('--distance', default=None, help=f'Comma-separated distance methods (default: {DEFAULTS["distance"]})')
    p.add_argument('--readability', default=None, help=f'Comma-separated readability methods (default: {DEFAULTS["readability"]})')
    p.add_argument('--group-key', dest='group_key', default=None)
    p.add_argument('--keep-stopwords', dest='remove_stopwords', action='store_false', default=None)
    p.add_argument('--keep-punct', dest='remove_punctuation', action='store_false', default=None)
    p.add_argument('--min-df', dest='min_df', type=int, default=None)
    p.add_argument('--weekly-policy', dest='weekly_policy', choices=MISSING_REFERENCE_POLICIES, default=None,
                   help='Run weekly similarity; what to do with weeks lacking a reference document')
    p.add_argument('--confidence', type=float, default=None)
    p.add_argument('--no-plots', action='store_true')
    p.add_argument('-v', '--verbose', action='store_true')
    return p.parse_args(argv)


def resolve_settings(args):
    """Defaults, overlaid by --config, overlaid by explicit flags."""
    settings = dict(DEFAULTS)
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as fh:
            from_file = json.load(fh)
        unknown = set(from_file) - set(DEFAULTS)
        if unknown:
            raise ValueError(f'unknown keys in {args.config}: {", ".join(sorted(unknown))}')
        settings.update(from_file)
    for key in DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value
    for key in ('similarity', 'distance', 'readability'):
        if isinstance(settings[key], str):
            settings[key] = [m.strip() for m in settings[key].split(',') if m.strip()]
    if not settings['reference']:
        raise ValueError('a reference speaker is required (--reference or "reference" in --config)')
    if settings['weekly_policy'] and not settings['similarity']:
        raise ValueError('--weekly-policy needs at least one similarity method')
    return settings


def run(records, settings, out):
    """Run the whole analysis on loaded records and write every output into `out`."""
    out = Path(out)
    out.mkdir(parents=True, exist_ok=True)
    reference = settings['reference']
    group_key = settings['group_key']
    matrix_config = MatrixConfig(remove_stopwords=settings['remove_stopwords'],
                                 remove_punctuation=settings['remove_punctuation'],
                                 min_df=settings['min_df'])

    groups = group_documents(records, group_key=group_key)
    print(f'{len(records)} documents from {len(groups)} groups; reference = {reference!r}')

    term_matrix = build_term_matrix(groups, matrix_config)
    summary = {'reference': reference, 'n_documents': int(len(records)), 'n_groups': len(groups),
               'top_terms': {g: dict(term_matrix.top_terms(g)) for g in term_matrix.groups}}
    for family in ('similarity', 'distance'):
        methods = settings[family]
        if not methods:
            continue
        frame = aggregate_frame(groups, reference, methods, term_matrix=term_matrix)
        frame.to_csv(out / f'{family}.csv', index=False)
        print('Wrote', out / f'{family}.csv')
        # closest first: high similarity, low distance
        ranking = order_groups_by_mean(frame, ascending=(family == 'distance'))
        summary[f'{family}_ranking'] = ranking
        if not settings.get('no_plots'):
            plot_comparison(frame, out / f'{family}.png', title=f'{family.capitalize()} to {reference}',
                            ascending=(family == 'distance'))

    if not settings.get('no_plots') and settings['similarity']:
        first = settings['similarity'][0]
        plot_matrix_heatmap(compare(term_matrix, first), out / f'heatmap_{first.replace(" ", "_")}.png',
                            title=f'{first} similarity')

    if settings['readability']:
        scores = score_documents(records, settings['readability'], group_key=group_key)
        read_summary = summarize_scores(scores, group_key=group_key, confidence=settings['confidence'])
        scores.to_csv(out / 'readability_scores.csv', index=False)
        read_summary.to_csv(out / 'readability_summary.csv', index=False)
        print('Wrote', out / 'readability_summary.csv')
        summary['readability_means'] = {
            m: dict(zip(g['speaker'], g['mean'].round(3))) for m, g in read_summary.groupby('method')
        }
        if not settings.get('no_plots'):
            plot_readability_summary(read_summary, out / 'readability_summary.png')
            for m in settings['readability']:
                plot_readability_boxplot(scores.rename(columns={group_key: 'speaker'}), out / f'boxplot_{m}.png', m)

    if settings['weekly_policy']:
        weekly = weekly_similarity(records, reference, settings['similarity'],
                                   missing_reference=settings['weekly_policy'], group_key=group_key,
                                   matrix_config=matrix_config, progress=True)
        weekly.to_csv(out / 'weekly_similarity.csv', index=False)
        summary['n_weeks'] = int(weekly['week'].nunique())
        print('Wrote', out / 'weekly_similarity.csv')

    with open(out / 'summary.json', 'w', encoding='utf-8') as fh:
        json.dump(summary, fh, indent=2, default=str)
    print('Summary written to', out / 'summary.json')
    return summary


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    settings = resolve_settings(args)
    settings['no_plots'] = args.no_plots

    source = Path(args.input)
    records = load_directory(source) if source.is_dir() else load_records(args.input)
    run(records, settings, args.out)


if __name__ == '__main__':
    main()
