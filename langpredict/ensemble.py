import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.ensemble import StackingClassifier
from sklearn.linear_model import LogisticRegression

from langpredict.config import MEMBERS_PER_FAMILY, META_MAX_ITER, N_JOBS, RANDOM_STATE
from langpredict.tuning import make_folds, top_candidates


def stack_members(searches, members_per_family=MEMBERS_PER_FAMILY):
    """Best ``members_per_family`` configurations of every tuned family, as unfitted pipelines."""
    members = []
    for family, search in searches.items():
        for rank, params in enumerate(top_candidates(search, members_per_family), start=1):
            member = clone(search.estimator).set_params(**params)
            members.append((f"{family}_{rank}", member))
    return members


def build_stack(searches, members_per_family=MEMBERS_PER_FAMILY, cv=None, n_jobs=N_JOBS):
    """Stack tuned members on their class probabilities with a logistic meta-learner."""
    return StackingClassifier(
        estimators=stack_members(searches, members_per_family),
        final_estimator=LogisticRegression(max_iter=META_MAX_ITER, random_state=RANDOM_STATE),
        cv=cv if cv is not None else make_folds(),
        stack_method="predict_proba",
        n_jobs=n_jobs,
    )


def member_weights(stack):
    """Blending weight of each member: summed absolute meta-learner coefficients."""
    coef = np.abs(stack.final_estimator_.coef_)
    names = list(stack.named_estimators_.keys())
    per_member = coef.shape[1] // len(names)
    weights = {
        name: float(coef[:, i * per_member:(i + 1) * per_member].sum())
        for i, name in enumerate(names)
    }
    return pd.Series(weights, name="weight").sort_values(ascending=False)
