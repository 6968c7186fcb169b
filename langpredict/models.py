import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import Pipeline
from sklearn.utils.validation import check_is_fitted

from langpredict.config import BOOSTED_GRID, KNN_GRID, LASSO_GRID, RANDOM_STATE
from langpredict.features import build_tfidf


def cosine_kernel_weights(distances):
    """Cosine kernel weights for k-NN votes.

    Each query's distances are scaled by a little more than its farthest
    neighbour, so the nearest neighbours weigh close to 1 and the farthest
    one still keeps a small positive weight.
    """
    distances = np.asarray(distances, dtype=float)
    d_max = distances.max(axis=1, keepdims=True)
    d_max = np.where(d_max > 0, d_max, 1.0) * 1.001
    return np.cos(np.pi / 2 * distances / d_max)


class LassoMultinomial(ClassifierMixin, BaseEstimator):
    """L1-penalised multinomial logistic regression with a per-sample penalty.

    ``penalty`` follows the glmnet convention (loss averaged over samples),
    so it translates to ``C = 1 / (n_samples * penalty)`` for scikit-learn.
    """

    def __init__(self, penalty=1e-3, max_iter=1000, tol=1e-4, random_state=RANDOM_STATE):
        self.penalty = penalty
        self.max_iter = max_iter
        self.tol = tol
        self.random_state = random_state

    def fit(self, X, y):
        if self.penalty <= 0:
            raise ValueError(f"penalty must be positive, got {self.penalty}")
        n_samples = X.shape[0]
        self.model_ = LogisticRegression(
            l1_ratio=1.0,
            solver="saga",
            C=1.0 / (n_samples * self.penalty),
            max_iter=self.max_iter,
            tol=self.tol,
            random_state=self.random_state,
        )
        self.model_.fit(X, y)
        self.classes_ = self.model_.classes_
        return self

    def predict(self, X):
        check_is_fitted(self, "model_")
        return self.model_.predict(X)

    def predict_proba(self, X):
        check_is_fitted(self, "model_")
        return self.model_.predict_proba(X)

    @property
    def coef_(self):
        check_is_fitted(self, "model_")
        return self.model_.coef_


def knn_pipeline():
    return Pipeline([
        ("tfidf", build_tfidf()),
        ("clf", KNeighborsClassifier(
            weights=cosine_kernel_weights,
            metric="cosine",
            algorithm="brute",
        )),
    ])


def lasso_pipeline():
    return Pipeline([
        ("tfidf", build_tfidf()),
        ("clf", LassoMultinomial()),
    ])


def boosted_pipeline():
    return Pipeline([
        ("tfidf", build_tfidf()),
        ("clf", GradientBoostingClassifier(random_state=RANDOM_STATE)),
    ])


MODEL_FAMILIES = {
    "knn": (knn_pipeline, KNN_GRID),
    "lasso": (lasso_pipeline, LASSO_GRID),
    "boosted": (boosted_pipeline, BOOSTED_GRID),
}


def make_pipeline(name):
    if name not in MODEL_FAMILIES:
        raise ValueError(f"Unknown model family '{name}'. Choose from {list(MODEL_FAMILIES)}")
    return MODEL_FAMILIES[name][0]()


def param_grid(name):
    if name not in MODEL_FAMILIES:
        raise ValueError(f"Unknown model family '{name}'. Choose from {list(MODEL_FAMILIES)}")
    return dict(MODEL_FAMILIES[name][1])
