"""Compare speakers' texts by similarity/distance and readability."""
from .aggregate import (
    ComparisonRecord,
    aggregate,
    aggregate_frame,
    collect_by_method,
    order_groups_by_mean,
    records_to_frame,
)
from .comparison import DISTANCE_METHODS, SIMILARITY_METHODS, compare, method_kind
from .errors import ComparisonError, EmptyInput, MissingReferenceGroup, UnknownMethod
from .load_corpus import group_documents, load_directory, load_records
from .readability import READABILITY_METHODS, score, score_documents, summarize_scores
from .term_matrix import MatrixConfig, TermMatrix, build_term_matrix
from .weekly import weekly_similarity

__version__ = '0.1.0'
