import pandas as pd
from sklearn.model_selection import GridSearchCV, StratifiedKFold

from langpredict.config import CV_FOLDS, GRID_VERBOSE, N_JOBS, RANDOM_STATE
from langpredict.models import make_pipeline, param_grid


def make_folds(random_state=RANDOM_STATE, n_splits=CV_FOLDS):
    return StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=random_state)


def tune(name, X, y, grid=None, cv=None, n_jobs=N_JOBS, verbose=GRID_VERBOSE):
    """Grid-search one model family on accuracy and refit the best configuration."""
    search = GridSearchCV(
        estimator=make_pipeline(name),
        param_grid=grid if grid is not None else param_grid(name),
        scoring="accuracy",
        cv=cv if cv is not None else make_folds(),
        n_jobs=n_jobs,
        verbose=verbose,
        refit=True,
    )
    search.fit(X, y)

    print(f"\n=== Best {name} hyperparameters ===")
    print(search.best_params_)
    print(f"Mean CV accuracy: {search.best_score_:.4f}")
    return search


def results_frame(search):
    """Tuning results as one row per configuration, best first."""
    results = pd.DataFrame(search.cv_results_)
    params = pd.json_normalize(results["params"].tolist())
    table = pd.concat(
        [params, results[["mean_test_score", "std_test_score", "rank_test_score"]]],
        axis=1,
    )
    return table.sort_values("rank_test_score", kind="stable").reset_index(drop=True)


def top_candidates(search, n=1):
    order = search.cv_results_["rank_test_score"].argsort(kind="stable")
    return [search.cv_results_["params"][i] for i in order[:n]]
