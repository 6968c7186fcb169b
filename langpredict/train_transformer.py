import json
import os

import joblib
import numpy as np
import torch
from datasets import Dataset
from sklearn.preprocessing import LabelEncoder
from transformers import (
    AutoModelForSequenceClassification, AutoTokenizer,
    DataCollatorWithPadding, Trainer, TrainingArguments,
)

from langpredict.config import (
    BATCH_SIZE, DATA_PATH, EPOCHS, LABEL_COLUMN, LEARNING_RATE, MAX_LENGTH,
    MODEL_NAME, RANDOM_STATE, TEXT_COLUMN, TOP_LANGUAGES, TRANSFORMER_DIR,
)
from langpredict.evaluate import compute_metrics as holdout_metrics, report
from langpredict.loader import load_repos, lump_languages, split_repos
from langpredict.text import clean_description


def encode_labels(languages):
    encoder = LabelEncoder()
    encoder.fit(languages)
    return encoder


def prepare_frames(df, encoder):
    """Split repositories and reduce them to ``text``/``label`` frames for the Trainer."""
    train_df, test_df = split_repos(df)
    frames = []
    for part in (train_df, test_df):
        frame = part[[TEXT_COLUMN, LABEL_COLUMN]].copy()
        frame["text"] = frame[TEXT_COLUMN].map(clean_description)
        frame["label"] = encoder.transform(frame[LABEL_COLUMN])
        frames.append(frame[["text", "label"]].reset_index(drop=True))
    return frames[0], frames[1]


def compute_metrics(eval_pred):
    logits, labels = eval_pred
    preds = np.asarray(logits).argmax(axis=-1)
    return holdout_metrics(labels, preds)


def save_label_mapping(encoder, output_dir):
    labels = {i: label for i, label in enumerate(encoder.classes_)}
    config = {
        "model_name": MODEL_NAME,
        "num_labels": len(encoder.classes_),
        "max_length": MAX_LENGTH,
    }
    joblib.dump(encoder, os.path.join(output_dir, "label_encoder.pkl"))
    with open(os.path.join(output_dir, "labels.json"), "w") as f:
        json.dump(labels, f, indent=2)
    with open(os.path.join(output_dir, "training_config.json"), "w") as f:
        json.dump(config, f, indent=2)


def main():
    device = "cuda" if torch.cuda.is_available() else "cpu"
    print(f"Using device: {device}")
    os.makedirs(TRANSFORMER_DIR, exist_ok=True)

    # --- LOAD & ENCODE DATA ---
    df = load_repos(DATA_PATH)
    df[LABEL_COLUMN] = lump_languages(df[LABEL_COLUMN], TOP_LANGUAGES)
    encoder = encode_labels(df[LABEL_COLUMN])
    save_label_mapping(encoder, TRANSFORMER_DIR)

    train_df, test_df = prepare_frames(df, encoder)
    print(f"Training set size: {len(train_df)}")
    print(f"Test set size: {len(test_df)}")

    # --- TOKENIZE ---
    tokenizer = AutoTokenizer.from_pretrained(MODEL_NAME)

    def tokenize_batch(batch):
        return tokenizer(batch["text"], truncation=True, max_length=MAX_LENGTH)

    train_ds = Dataset.from_pandas(train_df).map(tokenize_batch, batched=True)
    test_ds = Dataset.from_pandas(test_df).map(tokenize_batch, batched=True)

    # --- MODEL ---
    id2label = {i: label for i, label in enumerate(encoder.classes_)}
    model = AutoModelForSequenceClassification.from_pretrained(
        MODEL_NAME,
        num_labels=len(encoder.classes_),
        id2label=id2label,
        label2id={label: i for i, label in id2label.items()},
    )

    training_args = TrainingArguments(
        output_dir=TRANSFORMER_DIR,
        eval_strategy="epoch",
        save_strategy="epoch",
        save_total_limit=2,
        learning_rate=LEARNING_RATE,
        per_device_train_batch_size=BATCH_SIZE,
        per_device_eval_batch_size=BATCH_SIZE,
        num_train_epochs=EPOCHS,
        logging_steps=50,
        load_best_model_at_end=True,
        metric_for_best_model="accuracy",
        greater_is_better=True,
        seed=RANDOM_STATE,
        report_to="none",
    )

    trainer = Trainer(
        model=model,
        args=training_args,
        train_dataset=train_ds,
        eval_dataset=test_ds,
        processing_class=tokenizer,
        data_collator=DataCollatorWithPadding(tokenizer),
        compute_metrics=compute_metrics,
    )

    print("\n=== Training Model ===")
    trainer.train()

    print(f"\n=== Saving Model to {TRANSFORMER_DIR} ===")
    trainer.save_model(TRANSFORMER_DIR)
    tokenizer.save_pretrained(TRANSFORMER_DIR)

    # --- FINAL EVALUATION ---
    predictions = trainer.predict(test_ds)
    preds = predictions.predictions.argmax(axis=-1)
    report(
        "Transformer holdout",
        encoder.inverse_transform(test_df["label"]),
        encoder.inverse_transform(preds),
    )
    print(f"\nTraining complete. Model saved to {TRANSFORMER_DIR}")


if __name__ == "__main__":
    main()
