import numpy as np
import pandas as pd
import pytest

VOCAB = {
    "Python": ["django", "flask", "pandas", "numpy", "pip", "pytest", "notebook", "scraper"],
    "JavaScript": ["react", "node", "npm", "browser", "frontend", "webpack", "vue", "express"],
    "Go": ["goroutine", "grpc", "kubernetes", "operator", "binary", "channel", "gin", "cobra"],
}
FILLER = ["simple", "tool", "library", "project", "fast", "awesome", "small", "api"]


def make_corpus(per_class=40, seed=0):
    rng = np.random.default_rng(seed)
    rows = []
    for language, words in VOCAB.items():
        for i in range(per_class):
            tokens = list(rng.choice(words, size=4)) + list(rng.choice(FILLER, size=2))
            rng.shuffle(tokens)
            rows.append({
                "full_name": f"user{i}/{language.lower()}-{i}",
                "description": "A " + " ".join(tokens) + " for the web",
                "language": language,
                "stars": int(rng.integers(0, 5000)),
                "size": int(rng.integers(10, 90000)),
                "license": "MIT",
                "owner": "User",
                "open_issues_count": int(rng.integers(0, 50)),
                "created_at": "2019-05-01T12:00:00Z",
            })
    return pd.DataFrame(rows).sample(frac=1, random_state=seed).reset_index(drop=True)


@pytest.fixture
def corpus():
    return make_corpus()


@pytest.fixture
def small_grids():
    return {
        "knn": {"tfidf__max_features": [20], "clf__n_neighbors": [5]},
        "lasso": {"tfidf__max_features": [20], "clf__penalty": [1e-3, 1e-2]},
        "boosted": {
            "tfidf__max_features": [20],
            "clf__learning_rate": [0.1],
            "clf__n_estimators": [20],
            "clf__max_features": [10],
        },
    }


LABELS = ["Go", "JavaScript", "Python"]


@pytest.fixture
def tiny_bert(tmp_path):
    """A one-layer BERT and word-level tokenizer saved locally, so nothing is downloaded."""
    from transformers import BertConfig, BertForSequenceClassification, BertTokenizer

    words = sorted({w for ws in VOCAB.values() for w in ws} | set(FILLER) | {"a", "for", "the", "web"})
    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_text("\n".join(["[PAD]", "[UNK]", "[CLS]", "[SEP]", "[MASK]"] + words) + "\n")

    model_dir = tmp_path / "tiny_bert"
    tokenizer = BertTokenizer(str(vocab_file))
    config = BertConfig(
        vocab_size=tokenizer.vocab_size,
        hidden_size=8,
        num_hidden_layers=1,
        num_attention_heads=2,
        intermediate_size=16,
        max_position_embeddings=160,
        num_labels=len(LABELS),
        id2label=dict(enumerate(LABELS)),
        label2id={label: i for i, label in enumerate(LABELS)},
    )
    BertForSequenceClassification(config).save_pretrained(str(model_dir))
    tokenizer.save_pretrained(str(model_dir))
    return model_dir
