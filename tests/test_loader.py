import pandas as pd
import pytest

from langpredict import loader


def test_load_repos_drops_incomplete_rows(tmp_path, corpus):
    df = corpus.copy()
    df.loc[0, "description"] = None
    df.loc[1, "language"] = None
    df.loc[2, "description"] = "   "
    path = tmp_path / "repos.csv"
    df.to_csv(path, index=False)

    loaded = loader.load_repos(str(path))
    assert len(loaded) == len(corpus) - 3
    assert loaded["description"].str.strip().ne("").all()
    assert pd.api.types.is_datetime64_any_dtype(loaded["created_at"])


def test_load_repos_skips_malformed_lines(tmp_path):
    path = tmp_path / "repos.csv"
    path.write_text(
        "full_name,description,language\n"
        "a/b,A django app,Python\n"
        "c/d,broken,row,with,extra,fields\n"
        "e/f,A react widget,JavaScript\n"
    )
    loaded = loader.load_repos(str(path))
    assert loaded["full_name"].tolist() == ["a/b", "e/f"]


def test_load_repos_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader.load_repos(str(tmp_path / "nope.csv"))


def test_load_repos_missing_columns(tmp_path):
    path = tmp_path / "repos.csv"
    path.write_text("full_name,stars\na/b,3\n")
    with pytest.raises(ValueError):
        loader.load_repos(str(path))


def test_lump_languages():
    labels = ["Python"] * 5 + ["Go"] * 3 + ["Rust"] * 2 + ["Elm"]
    lumped = loader.lump_languages(labels, top_n=2)
    assert lumped.value_counts().to_dict() == {"Python": 5, "Go": 3, "Other": 3}


def test_split_is_seeded_and_stratified(corpus):
    train_a, test_a = loader.split_repos(corpus, random_state=1)
    train_b, test_b = loader.split_repos(corpus, random_state=1)
    assert train_a.index.equals(train_b.index)
    assert test_a.index.equals(test_b.index)
    assert len(test_a) == int(round(len(corpus) * 0.2))
    assert test_a["language"].value_counts().nunique() == 1
