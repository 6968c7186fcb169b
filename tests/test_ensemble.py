import pytest
from sklearn.linear_model import LogisticRegression

from langpredict import ensemble, tuning
from langpredict.evaluate import compare_models
from langpredict.loader import split_repos

from conftest import make_corpus

TOLERANCE = 0.05
FAMILIES = ("knn", "lasso", "boosted")


def tune_families(train_df, grids):
    return {
        name: tuning.tune(name, train_df["description"], train_df["language"],
                          grid=grids[name], cv=tuning.make_folds(n_splits=3), n_jobs=1)
        for name in FAMILIES
    }


@pytest.fixture
def searches(corpus, small_grids):
    train_df, _ = split_repos(corpus)
    return tune_families(train_df, small_grids)


def test_stack_members_use_best_candidates(searches):
    members = ensemble.stack_members(searches, members_per_family=2)
    names = [name for name, _ in members]
    assert names == ["knn_1", "lasso_1", "lasso_2", "boosted_1"]
    lasso_best = dict(members)["lasso_1"]
    assert lasso_best.get_params()["clf__penalty"] == searches["lasso"].best_params_["clf__penalty"]


def test_meta_learner_is_multinomial_logistic(searches):
    stack = ensemble.build_stack(searches, cv=tuning.make_folds(n_splits=3), n_jobs=1)
    assert isinstance(stack.final_estimator, LogisticRegression)
    assert stack.stack_method == "predict_proba"


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_stack_at_least_as_good_as_best_member(small_grids, seed):
    corpus = make_corpus(seed=seed)
    train_df, test_df = split_repos(corpus)
    searches = tune_families(train_df, small_grids)
    stack = ensemble.build_stack(searches, cv=tuning.make_folds(n_splits=3), n_jobs=1)
    stack.fit(train_df["description"], train_df["language"])

    models = {name: s.best_estimator_ for name, s in searches.items()}
    models["stack"] = stack
    table = compare_models(models, test_df["description"], test_df["language"]).set_index("model")

    best_member = table.drop(index="stack")["accuracy"].max()
    assert table.loc["stack", "accuracy"] >= best_member - TOLERANCE
    assert set(stack.predict(test_df["description"])) <= set(corpus["language"])


def test_member_weights(corpus, searches):
    train_df, _ = split_repos(corpus)
    stack = ensemble.build_stack(searches, cv=tuning.make_folds(n_splits=3), n_jobs=1)
    stack.fit(train_df["description"], train_df["language"])
    weights = ensemble.member_weights(stack)
    assert set(weights.index) == {"knn_1", "lasso_1", "boosted_1"}
    assert (weights >= 0).all()
    assert weights.is_monotonic_decreasing
