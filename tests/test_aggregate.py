"""Tests for comparing groups against a reference group."""
import math

import pandas as pd
import pytest

from textcompare.aggregate import (
    ComparisonRecord,
    aggregate,
    aggregate_frame,
    collect_by_method,
    order_groups_by_mean,
    records_to_frame,
    reference_scores,
)
from textcompare.errors import ComparisonError, EmptyInput, MissingReferenceGroup, UnknownMethod
from textcompare.term_matrix import MatrixConfig, build_term_matrix


class TestAggregate:

    def test_example_cosine_and_correlation(self, sample_groups):
        records = aggregate(sample_groups, 'alice', ['cosine', 'correlation'])
        assert [(r.group, r.method) for r in records] == [
            ('bob', 'cosine'), ('carol', 'cosine'),
            ('bob', 'correlation'), ('carol', 'correlation'),
        ]
        for r in records:
            assert isinstance(r, ComparisonRecord)
            assert isinstance(r.score, float)
        cosine = {r.group: r.score for r in records if r.method == 'cosine'}
        assert all(0.0 <= s <= 1.0 for s in cosine.values())
        assert all(-1.0 <= r.score <= 1.0 for r in records if r.method == 'correlation')
        # bob talks about the same things as alice, carol does not
        assert cosine['bob'] > cosine['carol']

    @pytest.mark.parametrize('methods', (['cosine'], ['jaccard', 'dice'], ['euclidean', 'manhattan', 'cosine']))
    def test_record_count(self, sample_groups, methods):
        records = aggregate(sample_groups, 'bob', methods)
        assert len(records) == (len(sample_groups) - 1) * len(methods)

    def test_reference_never_in_output(self, sample_groups):
        frame = aggregate_frame(sample_groups, 'carol', ['cosine', 'euclidean', 'hamman'])
        assert 'carol' not in set(frame['group'])
        assert list(frame.columns) == ['group', 'score', 'method']

    def test_unique_on_group_and_method(self, sample_groups):
        frame = aggregate_frame(sample_groups, 'alice', ['cosine', 'jaccard'])
        assert not frame.duplicated(subset=['group', 'method']).any()

    def test_deterministic(self, sample_groups):
        first = aggregate(sample_groups, 'alice', ['cosine', 'correlation'])
        second = aggregate(sample_groups, 'alice', ['cosine', 'correlation'])
        assert first == second

    def test_single_group_returns_nothing(self, sample_groups):
        records = aggregate({'alice': sample_groups['alice']}, 'alice', ['cosine', 'euclidean'])
        assert records == []

    def test_missing_reference(self, sample_groups):
        with pytest.raises(MissingReferenceGroup) as exc:
            aggregate(sample_groups, 'dave', ['cosine'])
        assert exc.value.reference == 'dave'
        assert isinstance(exc.value, LookupError)

    def test_missing_reference_in_provider_matrix(self, sample_groups):
        def drops_alice(term_matrix, method):
            others = [g for g in term_matrix.groups if g != 'alice']
            return pd.DataFrame(1.0, index=others, columns=others)

        with pytest.raises(MissingReferenceGroup):
            aggregate(sample_groups, 'alice', ['cosine'], compare=drops_alice)

    def test_empty_methods(self, sample_groups):
        with pytest.raises(EmptyInput):
            aggregate(sample_groups, 'alice', [])

    def test_empty_groups(self):
        with pytest.raises(EmptyInput):
            aggregate({}, 'alice', ['cosine'])

    def test_unknown_method(self, sample_groups):
        with pytest.raises(UnknownMethod) as exc:
            aggregate(sample_groups, 'alice', ['cosine', 'levenshtein'])
        assert exc.value.method == 'levenshtein'

    def test_duplicate_methods(self, sample_groups):
        with pytest.raises(ComparisonError):
            aggregate(sample_groups, 'alice', ['cosine', 'cosine'])

    def test_group_without_terms_halts(self):
        groups = {'alice': 'economy budget jobs', 'bob': 'the and of it'}
        with pytest.raises(EmptyInput) as exc:
            aggregate(groups, 'alice', ['cosine', 'correlation', 'jaccard'])
        assert 'bob' in str(exc.value)

    def test_min_df_pruning_that_empties_a_group_halts(self):
        groups = {'alice': 'economy budget', 'bob': 'economy budget', 'carol': 'drought harvest'}
        with pytest.raises(EmptyInput) as exc:
            aggregate(groups, 'alice', ['cosine'], matrix_config=MatrixConfig(min_df=2))
        assert 'carol' in str(exc.value)

    def test_reuses_given_term_matrix(self, sample_groups):
        tm = build_term_matrix(sample_groups)
        assert aggregate(sample_groups, 'alice', ['cosine'], term_matrix=tm) == \
            aggregate(sample_groups, 'alice', ['cosine'])

    def test_custom_provider_order_is_kept(self, sample_groups):
        def fixed(term_matrix, method):
            labels = ['carol', 'alice', 'bob']
            return pd.DataFrame([[1.0, 0.2, 0.3], [0.2, 1.0, 0.9], [0.3, 0.9, 1.0]], index=labels, columns=labels)

        records = aggregate(sample_groups, 'alice', ['a', 'b'], compare=fixed)
        assert [(r.group, r.score, r.method) for r in records] == [
            ('carol', 0.2, 'a'), ('bob', 0.9, 'a'), ('carol', 0.2, 'b'), ('bob', 0.9, 'b'),
        ]


class TestHelpers:

    def test_reference_scores_by_label(self):
        labels = ['x', 'y', 'z']
        matrix = pd.DataFrame([[0, 1, 2], [1, 0, 3], [2, 3, 0]], index=labels, columns=labels, dtype=float)
        row = reference_scores(matrix, 'y')
        assert row.to_dict('records') == [{'group': 'x', 'score': 1.0}, {'group': 'z', 'score': 3.0}]

    def test_collect_by_method_tags_and_concatenates(self):
        frame = collect_by_method(['m1', 'm2'], lambda m: pd.DataFrame({'value': [len(m), 0]}))
        assert frame['method'].tolist() == ['m1', 'm1', 'm2', 'm2']
        assert frame.index.tolist() == [0, 1, 2, 3]

    def test_records_to_frame(self):
        frame = records_to_frame([ComparisonRecord('bob', 0.5, 'cosine')])
        assert frame.to_dict('records') == [{'group': 'bob', 'score': 0.5, 'method': 'cosine'}]

    def test_order_groups_by_mean(self):
        frame = pd.DataFrame({
            'group': ['a', 'b', 'c', 'a', 'b', 'c'],
            'score': [0.1, 0.9, 0.5, 0.3, 0.7, 0.5],
            'method': ['m'] * 3 + ['n'] * 3,
        })
        assert order_groups_by_mean(frame) == ['b', 'c', 'a']
        assert order_groups_by_mean(frame, ascending=True) == ['a', 'c', 'b']
        assert order_groups_by_mean(frame.iloc[0:0]) == []

    def test_distance_scores_are_non_negative(self, sample_groups):
        frame = aggregate_frame(sample_groups, 'alice', ['euclidean', 'canberra'])
        assert (frame['score'] >= 0).all()
        assert not any(math.isnan(s) for s in frame['score'])