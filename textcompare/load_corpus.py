"""
load_corpus.py

Load speech/text records and group them by speaker.

Records come either from a table (CSV, JSON or JSON-lines, local path or URL)
with one row per text, or from a directory laid out as `data/{speaker}/*.txt`.
Every loader returns a DataFrame with the columns `speaker` and `text`, plus
`date` and `week` when the source carries dates.

Usage:
    python -m textcompare.load_corpus --input data/speeches.csv
"""
import argparse
import logging
import re
from pathlib import Path

import pandas as pd

from .errors import EmptyInput

logger = logging.getLogger(__name__)

SPEAKER_ALIASES = ('speaker', 'author', 'name')


def clean_text(text: str) -> str:
    # Normalize newlines, collapse runs of spaces and blank lines
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _read_table(source: str) -> pd.DataFrame:
    suffix = Path(str(source).split('?')[0]).suffix.lower()
    if suffix == '.jsonl':
        return pd.read_json(source, lines=True)
    if suffix == '.json':
        return pd.read_json(source)
    return pd.read_csv(source)


def normalize_records(df: pd.DataFrame) -> pd.DataFrame:
    """Rename the author column to `speaker`, clean text and derive `week` from `date`."""
    df = df.copy()
    if 'speaker' not in df.columns:
        alias = next((c for c in SPEAKER_ALIASES if c in df.columns), None)
        if alias is None:
            raise EmptyInput(f'no speaker column; expected one of {SPEAKER_ALIASES}')
        df = df.rename(columns={alias: 'speaker'})
    if 'text' not in df.columns:
        raise EmptyInput('no text column')

    df['speaker'] = df['speaker'].astype(str).str.strip()
    df['text'] = df['text'].fillna('').astype(str).map(clean_text)
    n_before = len(df)
    df = df[df['text'] != ''].reset_index(drop=True)
    if len(df) < n_before:
        logger.warning('dropped %d records with empty text', n_before - len(df))

    if 'date' in df.columns:
        df['date'] = pd.to_datetime(df['date'], errors='coerce')
        df['week'] = df['date'].dt.isocalendar().week.astype('Int64')
    return df


def load_records(source) -> pd.DataFrame:
    """Read records from a CSV/JSON/JSON-lines file or URL."""
    logger.info('loading records from %s', source)
    df = normalize_records(_read_table(source))
    if df.empty:
        raise EmptyInput(f'no records with text in {source}')
    logger.info('loaded %d records from %d speakers', len(df), df['speaker'].nunique())
    return df


def load_directory(data_dir) -> pd.DataFrame:
    """Read `data_dir/{speaker}/*.txt` into records, one row per file."""
    data_dir = Path(data_dir)
    rows = []
    for speaker_dir in sorted(data_dir.iterdir()):
        if not speaker_dir.is_dir():
            continue
        for txt in sorted(speaker_dir.rglob('*.txt')):
            try:
                t = txt.read_text(encoding='utf-8')
            except UnicodeDecodeError:
                t = txt.read_text(encoding='latin-1')
            rows.append({'speaker': speaker_dir.name, 'source': str(txt.relative_to(data_dir)), 'text': t})
    if not rows:
        raise EmptyInput(f'no .txt files under {data_dir}')
    return normalize_records(pd.DataFrame(rows))


def group_documents(records: pd.DataFrame, group_key: str = 'speaker') -> dict:
    """Return a mapping group -> all of that group's texts joined by newlines."""
    if records.empty:
        return {}
    grouped = records.groupby(group_key, sort=True)['text'].apply('\n'.join)
    return {str(k): v for k, v in grouped.items()}


def main(argv=None):
    parser = argparse.ArgumentParser(description='Load records and print per-speaker counts')
    parser.add_argument('--input', required=True, help='CSV/JSON file, URL, or directory of speaker folders')
    args = parser.parse_args(argv)

    source = Path(args.input)
    df = load_directory(source) if source.is_dir() else load_records(args.input)
    counts = df.groupby('speaker')['text'].agg(['count', lambda s: s.str.split().str.len().sum()])
    counts.columns = ['n_docs', 'n_words']
    print(counts.sort_values('n_words', ascending=False).to_string())


if __name__ == '__main__':
    main()
