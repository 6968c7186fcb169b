import os

import joblib


def cache_key(*parts):
    """Short content hash of whatever a cached result was computed from."""
    return joblib.hash(parts)[:12]


def cached(path, compute):
    """Load the joblib blob at ``path``; compute, save and return it when missing."""
    if os.path.exists(path):
        print(f"Loading cached result from {path}")
        return joblib.load(path)

    result = compute()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    joblib.dump(result, path)
    print(f"Saved result to {path}")
    return result
