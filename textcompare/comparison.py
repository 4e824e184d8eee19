"""
Pairwise similarity and distance matrices over a TermMatrix.

The metric arithmetic is scipy's (`scipy.spatial.distance.pdist`); this module
only maps method names onto scipy metrics and turns the condensed result into
a square DataFrame labelled by group.

Similarity methods (1.0 on the diagonal):
    correlation, cosine           term counts, 1 - scipy distance
    jaccard, dice, simple matching
                                  term presence, 1 - scipy distance
    hamman                        term presence, 1 - 2 * hamming distance

Distance methods (0.0 on the diagonal):
    euclidean, manhattan, maximum, canberra, minkowski (order `p`)
"""
import numpy as np
import pandas as pd
from scipy.spatial.distance import pdist, squareform

from .errors import UnknownMethod

# name -> (scipy metric, use term presence instead of counts)
SIMILARITY_METHODS = {
    'correlation': ('correlation', False),
    'cosine': ('cosine', False),
    'jaccard': ('jaccard', True),
    'dice': ('dice', True),
    'simple matching': ('hamming', True),
    'hamman': ('hamming', True),
}

DISTANCE_METHODS = {
    'euclidean': 'euclidean',
    'manhattan': 'cityblock',
    'maximum': 'chebyshev',
    'canberra': 'canberra',
    'minkowski': 'minkowski',
}


def known_methods():
    return list(SIMILARITY_METHODS) + list(DISTANCE_METHODS)


def method_kind(method: str) -> str:
    if method in SIMILARITY_METHODS:
        return 'similarity'
    if method in DISTANCE_METHODS:
        return 'distance'
    raise UnknownMethod(method, known_methods())


def _square(condensed, groups, diagonal=0.0):
    mat = squareform(condensed, checks=False)
    np.fill_diagonal(mat, diagonal)
    return pd.DataFrame(mat, index=groups, columns=groups)


def compare(term_matrix, method: str, p: float = 2) -> pd.DataFrame:
    """Return the full group x group matrix for `method`."""
    kind = method_kind(method)
    groups = list(term_matrix.groups)

    if kind == 'distance':
        metric = DISTANCE_METHODS[method]
        kwargs = {'p': p} if metric == 'minkowski' else {}
        return _square(pdist(term_matrix.dense(), metric=metric, **kwargs), groups)

    metric, binary = SIMILARITY_METHODS[method]
    d = pdist(term_matrix.dense(binary=binary), metric=metric)
    sim = 1.0 - 2.0 * d if method == 'hamman' else 1.0 - d
    return _square(sim, groups, diagonal=1.0)
