from sklearn.feature_extraction.text import TfidfVectorizer

from langpredict.text import clean_description, tokenize


def build_tfidf(max_tokens=None):
    """TF-IDF over cleaned, stop-word-free description tokens, capped at ``max_tokens`` terms."""
    return TfidfVectorizer(
        preprocessor=clean_description,
        tokenizer=tokenize,
        token_pattern=None,
        lowercase=False,
        max_features=max_tokens,
    )
