"""Tune the classical description classifiers, stack them and compare on a holdout split.

Run with ``python -m langpredict.train_models``. Tuning searches and fitted
models are cached under ``ARTIFACT_DIR`` and reused on the next run.
"""
import os

from langpredict.artifacts import cache_key, cached
from langpredict.config import (
    ARTIFACT_DIR, DATA_PATH, LABEL_COLUMN, MEMBERS_PER_FAMILY, TEXT_COLUMN, TOP_LANGUAGES,
)
from langpredict.ensemble import build_stack, member_weights
from langpredict.evaluate import compare_models, plot_roc_curves, report
from langpredict.loader import load_repos, lump_languages, split_repos
from langpredict.models import MODEL_FAMILIES, param_grid
from langpredict.tuning import results_frame, tune


def artifact(name):
    return os.path.join(ARTIFACT_DIR, name)


def train_all(df, families=None, grids=None):
    """Tune every family, fit the stack and evaluate everything on the holdout.

    Args:
        df (pd.DataFrame): repositories with description and language columns
        families (list): model families to tune, all of them by default
        grids (dict): family -> parameter grid overriding the configured one

    Returns:
        dict: ``searches``, ``stack``, ``comparison`` and the ``test`` frame
    """
    families = families or list(MODEL_FAMILIES)
    grids = grids or {}

    train_df, test_df = split_repos(df)
    print(f"Training set size: {len(train_df)}")
    print(f"Test set size: {len(test_df)}")

    X_train, y_train = train_df[TEXT_COLUMN], train_df[LABEL_COLUMN]
    X_test, y_test = test_df[TEXT_COLUMN], test_df[LABEL_COLUMN]

    searches, keys = {}, []
    for name in families:
        print(f"\n=== Tuning {name} ===")
        grid = grids.get(name) or param_grid(name)
        key = cache_key(name, grid, X_train, y_train)
        keys.append(key)
        searches[name] = cached(
            artifact(f"{name}_search_{key}.pkl"),
            lambda name=name, grid=grid: tune(name, X_train, y_train, grid=grid),
        )
        results_frame(searches[name]).to_csv(artifact(f"{name}_tuning.csv"), index=False)

    print("\n=== Fitting stacked ensemble ===")
    stack = cached(
        artifact(f"stack_{cache_key(keys, MEMBERS_PER_FAMILY)}.pkl"),
        lambda: build_stack(searches).fit(X_train, y_train),
    )
    print("\nMember weights:")
    print(member_weights(stack).to_string())

    models = {name: search.best_estimator_ for name, search in searches.items()}
    models["stack"] = stack

    for name, model in models.items():
        report(name, y_test, model.predict(X_test))

    comparison = compare_models(models, X_test, y_test)
    comparison.to_csv(artifact("model_comparison.csv"), index=False)
    print("\n=== Model comparison ===")
    print(comparison.to_string(index=False))

    plot_roc_curves(y_test, stack.predict_proba(X_test), stack.classes_,
                    artifact("stack_roc_auc.png"))

    return {"searches": searches, "stack": stack, "comparison": comparison, "test": test_df}


def main():
    os.makedirs(ARTIFACT_DIR, exist_ok=True)

    df = load_repos(DATA_PATH)
    print(f"Loaded {len(df)} repositories")
    df[LABEL_COLUMN] = lump_languages(df[LABEL_COLUMN], TOP_LANGUAGES)
    print(df[LABEL_COLUMN].value_counts().to_string())

    train_all(df)
    print("\nTraining completed!")


if __name__ == "__main__":
    main()
