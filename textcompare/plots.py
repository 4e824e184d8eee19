"""Figures for comparison tables and readability summaries, saved as PNG."""
from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns

from .aggregate import order_groups_by_mean


def plot_comparison(frame, out_path, title=None, ascending=False):
    """Score per group, one colour per method, groups ordered by mean score."""
    order = order_groups_by_mean(frame, ascending=ascending)
    fig, ax = plt.subplots(figsize=(10, max(4, len(order) * 0.35)))
    sns.pointplot(data=frame, x='score', y='group', hue='method', order=order,
                  linestyle='none', dodge=0.4, errorbar=None, ax=ax)
    ax.set_xlabel('score')
    ax.set_ylabel('')
    if title:
        ax.set_title(title)
    fig.tight_layout()
    fig.savefig(Path(out_path))
    plt.close(fig)
    return Path(out_path)


def plot_matrix_heatmap(matrix, out_path, title=None):
    fig, ax = plt.subplots(figsize=(max(6, len(matrix) * 0.5), max(5, len(matrix) * 0.45)))
    sns.heatmap(matrix, annot=len(matrix) <= 15, fmt='.2f', cmap='magma', ax=ax)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    fig.savefig(Path(out_path))
    plt.close(fig)
    return Path(out_path)


def plot_readability_summary(summary, out_path):
    """Mean score per speaker with confidence intervals, one panel per method."""
    methods = list(summary['method'].unique())
    n_speakers = summary['speaker'].nunique()
    fig, axes = plt.subplots(1, len(methods), figsize=(4 * len(methods), max(4, n_speakers * 0.35)),
                             sharey=True, squeeze=False)
    for ax, method in zip(axes[0], methods):
        s = summary[summary['method'] == method].sort_values('mean')
        err = [(s['mean'] - s['confidence_lower']).fillna(0), (s['confidence_upper'] - s['mean']).fillna(0)]
        ax.errorbar(s['mean'], s['speaker'], xerr=err, fmt='o', capsize=3)
        ax.set_title(method)
        ax.set_xlabel('mean')
    fig.tight_layout()
    fig.savefig(Path(out_path))
    plt.close(fig)
    return Path(out_path)


def plot_readability_boxplot(scores, out_path, method):
    s = scores[scores['method'] == method]
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.boxplot(x='speaker', y='score', data=s, ax=ax)
    ax.tick_params(axis='x', labelrotation=45)
    ax.set_title(f'Readability: {method}')
    fig.tight_layout()
    fig.savefig(Path(out_path))
    plt.close(fig)
    return Path(out_path)
