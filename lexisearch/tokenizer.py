"""
Tokenizer used to turn record text into index keys.
Extracts text from HTML, splits it into lowercase alphanumeric tokens and
optionally applies Porter stemming.
"""

import re
import warnings
from pathlib import Path

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, XMLParsedAsHTMLWarning
from nltk.stem import PorterStemmer
from nltk.tokenize import NLTKWordTokenizer

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_STEMMER = PorterStemmer()
# Treebank-style word tokenizer, needs no downloaded corpora (unlike word_tokenize)
_WORD_TOKENIZER = NLTKWordTokenizer()

_NON_ALNUM = re.compile(r"[\W_]+")


def stem_tokens(tokens: list[str]) -> list[str]:
    """Stem a list of tokens (Porter)."""
    return [_STEMMER.stem(t) for t in tokens]


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def tokenize(text: str) -> list[str]:
    """
    Tokenize text into words with NLTK's word tokenizer, which handles
    contractions, punctuation and hyphenation better than a plain regex.
    Returns lowercase, alphanumeric-only tokens (length >= 1); letters
    outside ASCII are kept, so "São Paulo" gives ["são", "paulo"].
    """
    if not text:
        return []
    raw = _WORD_TOKENIZER.tokenize(text)
    # Punctuation-only tokens like "," end up empty and are dropped
    tokens = [_NON_ALNUM.sub("", w.lower()) for w in raw]
    return [t for t in tokens if t]


def read_html_file(filepath: Path) -> str:
    """
    Read HTML file content, handling common encodings.
    """
    for encoding in ("utf-8", "latin-1", "cp1252"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode file: {filepath}")
