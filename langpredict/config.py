import os

import numpy as np

# --- PATHS ---
DATA_PATH = os.environ.get("LANGPREDICT_DATA", "data/repositories.csv")
ARTIFACT_DIR = os.environ.get("LANGPREDICT_ARTIFACTS", "artifacts")
TRANSFORMER_DIR = os.environ.get("LANGPREDICT_TRANSFORMER_DIR", "transformer_model")

# --- DATA ---
REPO_COLUMNS = [
    "full_name", "description", "language", "stars", "size",
    "license", "owner", "open_issues_count", "created_at",
]
TEXT_COLUMN = "description"
LABEL_COLUMN = "language"
TOP_LANGUAGES = 10
OTHER_LABEL = "Other"

# --- SPLITS ---
RANDOM_STATE = 42
TEST_SIZE = 0.2
CV_FOLDS = 5
GRID_VERBOSE = 1
N_JOBS = -1

# --- HYPERPARAMETER GRIDS ---
KNN_GRID = {
    "tfidf__max_features": list(range(50, 351, 50)),
    "clf__n_neighbors": list(range(50, 251, 50)),
}

LASSO_GRID = {
    "tfidf__max_features": list(range(200, 1001, 200)),
    "clf__penalty": list(np.logspace(-7, -1, 7)),
}

BOOSTED_GRID = {
    "tfidf__max_features": [1000],
    "clf__learning_rate": list(np.logspace(-3, -1, 3)),
    "clf__n_estimators": [200, 400, 600, 800, 1000],
    "clf__max_features": [10, 30, 100],
}

# --- TRANSFORMER ---
MODEL_NAME = "distilbert-base-uncased"
EPOCHS = 3
BATCH_SIZE = 16
MAX_LENGTH = 128
LEARNING_RATE = 5e-5

# --- STACKING ---
MEMBERS_PER_FAMILY = 1
META_MAX_ITER = 1000
