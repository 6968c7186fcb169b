import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    auc,
    classification_report,
    precision_recall_fscore_support,
    roc_curve,
)
from sklearn.preprocessing import label_binarize


def compute_metrics(y_true, y_pred):
    acc = accuracy_score(y_true, y_pred)
    prec, rec, f1, _ = precision_recall_fscore_support(
        y_true, y_pred, average="weighted", zero_division=0
    )
    return {"accuracy": acc, "precision": prec, "recall": rec, "f1": f1}


def compare_models(models, X_test, y_test):
    """Holdout metrics for each fitted model, best accuracy first.

    Args:
        models (dict): name -> fitted estimator
        X_test: raw descriptions
        y_test: true languages

    Returns:
        pd.DataFrame: one row per model
    """
    rows = []
    for name, model in models.items():
        metrics = compute_metrics(y_test, model.predict(X_test))
        rows.append({"model": name, **metrics})
    table = pd.DataFrame(rows, columns=["model", "accuracy", "precision", "recall", "f1"])
    return table.sort_values("accuracy", ascending=False, kind="stable").reset_index(drop=True)


def report(name, y_true, y_pred):
    metrics = compute_metrics(y_true, y_pred)
    print(f"\n=== {name} ===")
    print(f"Accuracy:  {metrics['accuracy']:.4f}")
    print(f"Precision: {metrics['precision']:.4f}")
    print(f"Recall:    {metrics['recall']:.4f}")
    print(f"F1-score:  {metrics['f1']:.4f}")
    print("\nClassification Report:")
    print(classification_report(y_true, y_pred, digits=4, zero_division=0))
    return metrics


def plot_roc_curves(y_true, proba, classes, path, title="ROC-AUC Curve by Language"):
    """One-vs-rest ROC curve per language; returns the per-class AUC."""
    classes = list(classes)
    y_bin = label_binarize(y_true, classes=classes)
    if len(classes) == 2:
        y_bin = np.hstack([1 - y_bin, y_bin])

    roc_auc = {}
    plt.figure(figsize=(10, 8))
    colors = plt.colormaps["tab20"]
    for i, label in enumerate(classes):
        if y_bin[:, i].min() == y_bin[:, i].max():
            continue  # class absent from the holdout
        fpr, tpr, _ = roc_curve(y_bin[:, i], proba[:, i])
        roc_auc[label] = auc(fpr, tpr)
        plt.plot(fpr, tpr, color=colors(i % 20), lw=2,
                 label=f"{label} (AUC = {roc_auc[label]:.2f})")

    plt.plot([0, 1], [0, 1], "k--", lw=1)
    plt.xlim([0.0, 1.0])
    plt.ylim([0.0, 1.05])
    plt.xlabel("False Positive Rate")
    plt.ylabel("True Positive Rate")
    plt.title(title)
    plt.legend(loc="lower right")
    plt.grid(True)

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.savefig(path)
    plt.close()
    print(f"ROC-AUC plot saved to {path}")
    return roc_auc
