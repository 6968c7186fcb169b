import os

import pandas as pd
from sklearn.model_selection import train_test_split

from langpredict.config import (
    LABEL_COLUMN, OTHER_LABEL, RANDOM_STATE, REPO_COLUMNS, TEST_SIZE, TEXT_COLUMN,
)

REQUIRED_COLUMNS = [TEXT_COLUMN, LABEL_COLUMN]


def load_repos(path):
    """Read the repository metadata CSV, keeping rows with a description and a language."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Repository data not found: {path}")

    df = pd.read_csv(path, on_bad_lines="skip")
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    keep = [c for c in REPO_COLUMNS if c in df.columns]
    df = df[keep].dropna(subset=REQUIRED_COLUMNS)
    df[TEXT_COLUMN] = df[TEXT_COLUMN].astype(str)
    df = df[df[TEXT_COLUMN].str.strip() != ""].copy()

    if "created_at" in df.columns:
        df["created_at"] = pd.to_datetime(df["created_at"], errors="coerce", utc=True)

    return df.reset_index(drop=True)


def lump_languages(labels, top_n, other=OTHER_LABEL):
    """Keep the ``top_n`` most frequent languages and fold the rest into ``other``."""
    labels = pd.Series(labels)
    top = labels.value_counts().index[:top_n]
    return labels.where(labels.isin(top), other)


def split_repos(df, test_size=TEST_SIZE, random_state=RANDOM_STATE):
    return train_test_split(
        df,
        test_size=test_size,
        random_state=random_state,
        stratify=df[LABEL_COLUMN],
    )
