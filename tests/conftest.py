"""
Pytest configuration and fixtures for textcompare tests.
"""
import matplotlib

matplotlib.use('Agg')

import pandas as pd
import pytest


@pytest.fixture
def sample_groups():
    """Three speakers with overlapping but distinct vocabulary."""
    return {
        'alice': ("The economy is growing and wages are rising. Our budget invests in schools, "
                  "hospitals and housing. Growth in the economy means more jobs for families."),
        'bob': ("Wages are falling while housing costs climb. The budget ignores families and "
                "the economy leaves workers behind. Hospitals need more nurses."),
        'carol': ("Farmers need rain. The drought has damaged crops across the region and "
                  "rural roads need repair before the harvest season."),
    }


@pytest.fixture
def sample_records():
    """Dated records over two ISO weeks; 'alice' speaks only in the first."""
    return pd.DataFrame([
        {'speaker': 'alice', 'date': '2023-01-02', 'text': 'The economy is growing. Budget investment creates jobs.'},
        {'speaker': 'alice', 'date': '2023-01-04', 'text': 'Schools and hospitals receive record funding this year.'},
        {'speaker': 'bob', 'date': '2023-01-03', 'text': 'The economy is stalling. Jobs are disappearing from towns.'},
        {'speaker': 'carol', 'date': '2023-01-05', 'text': 'Hospitals report long waiting lists. Funding arrives slowly.'},
        {'speaker': 'bob', 'date': '2023-01-10', 'text': 'Housing prices keep rising for young families.'},
        {'speaker': 'carol', 'date': '2023-01-11', 'text': 'Rural roads need urgent repair before winter storms.'},
    ])
