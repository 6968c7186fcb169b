import re
import unicodedata

from nltk.tokenize.toktok import ToktokTokenizer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

URL_RE = re.compile(r"(https?://|www\.)\S+")
NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

# Spell out symbol-heavy language names before punctuation is stripped.
# Only whole tokens match, so "abc++" and "foo.network" are left alone.
SYMBOL_WORDS = [
    (re.compile(r"(?<![a-z0-9])c\+\+(?![a-z0-9+])"), " cpp "),
    (re.compile(r"(?<![a-z0-9])c#(?![a-z0-9#])"), " csharp "),
    (re.compile(r"(?<![a-z0-9])f#(?![a-z0-9#])"), " fsharp "),
    (re.compile(r"\.net(?![a-z0-9])"), " dotnet "),
]

# Single characters that still name a language
KEEP_SHORT = {"c", "r", "d"}

STOP_WORDS = frozenset(ENGLISH_STOP_WORDS)

_tokenizer = ToktokTokenizer()


def clean_description(text):
    if not isinstance(text, str):
        return ""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = URL_RE.sub(" ", text.lower())
    for pattern, word in SYMBOL_WORDS:
        text = pattern.sub(word, text)
    text = NON_ALNUM_RE.sub(" ", text)
    return " ".join(text.split())


def tokenize(text):
    """Split cleaned text into tokens, dropping stop words and stray characters."""
    tokens = _tokenizer.tokenize(text)
    return [
        t for t in tokens
        if t not in STOP_WORDS and (len(t) > 1 or t in KEEP_SHORT)
    ]


def preprocess(text):
    return " ".join(tokenize(clean_description(text)))
