import json
import os
import sys

import pandas as pd
import torch
from transformers import AutoModelForSequenceClassification, AutoTokenizer

from langpredict.config import MAX_LENGTH, TRANSFORMER_DIR
from langpredict.text import clean_description

REQUIRED_FILES = ["config.json", "labels.json"]


class LanguagePredictor:
    """Fine-tuned transformer loaded back from its output directory."""

    def __init__(self, model_dir=TRANSFORMER_DIR):
        missing = [f for f in REQUIRED_FILES if not os.path.exists(os.path.join(model_dir, f))]
        if missing:
            raise FileNotFoundError(f"No trained model in {model_dir} (missing {missing})")

        self.device = "cuda" if torch.cuda.is_available() else "cpu"
        self.model_dir = model_dir

        with open(os.path.join(model_dir, "labels.json"), "r") as f:
            self.labels = {int(k): v for k, v in json.load(f).items()}

        self.tokenizer = AutoTokenizer.from_pretrained(model_dir)
        self.model = AutoModelForSequenceClassification.from_pretrained(model_dir)
        self.model.to(self.device)
        self.model.eval()

    def predict(self, text, return_probabilities=False):
        """
        Predict the language of one repository description

        Args:
            text (str): repository description
            return_probabilities (bool): also return every language's probability

        Returns:
            dict: predicted language and its confidence
        """
        inputs = self.tokenizer(
            clean_description(text),
            return_tensors="pt",
            truncation=True,
            max_length=MAX_LENGTH,
        ).to(self.device)

        with torch.no_grad():
            logits = self.model(**inputs).logits
        probs = torch.softmax(logits, dim=1)[0]
        pred_id = torch.argmax(probs).item()

        result = {
            "text": text,
            "predicted_language": self.labels[pred_id],
            "confidence": probs[pred_id].item(),
        }
        if return_probabilities:
            result["probabilities"] = {self.labels[i]: p.item() for i, p in enumerate(probs)}
        return result

    def predict_batch(self, texts, return_probabilities=False):
        return [self.predict(text, return_probabilities) for text in texts]


def main(argv=None):
    texts = list(argv if argv is not None else sys.argv[1:])
    if not texts:
        print("Usage: python -m langpredict.predict \"repository description\" ...")
        return 2

    try:
        predictor = LanguagePredictor(TRANSFORMER_DIR)
    except FileNotFoundError as e:
        print(f"Model not trained. Please train the model first. ({e})")
        return 1

    results = pd.DataFrame(predictor.predict_batch(texts))
    print(results.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
