"""
Index builder: constructs an inverted index from key records.
Also provides the document record source: HTML/JSON files from a directory,
tokenized into keys with integer record ids.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Hashable, Iterable, TypeVar
from urllib.parse import urlparse

from .posting import InvertedIndex
from .records import KeyRecord, KeyRecordSet
from .tokenizer import extract_text_from_html, read_html_file, stem_tokens, tokenize

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


def build_index(records: Iterable[KeyRecord[K]]) -> InvertedIndex[K]:
    """
    Build an inverted index with one add_record call per key occurrence,
    so a key repeated inside a record raises that posting's term frequency.
    """
    index: InvertedIndex[K] = InvertedIndex()
    record_count = 0
    for record in records:
        record_count += 1
        for key in record.keys():
            index.add_record(key, record.record_id)
    logger.debug("Indexed %d records under %d keys", record_count, len(index))
    return index


@dataclass
class Document:
    """
    A text document as a key record.
    - record_id: integer id (0, 1, 2, ... in load order)
    - url: source URL (fragment stripped) or path relative to the data dir
    - tokens: index keys, one per occurrence
    """

    record_id: int
    url: str
    tokens: list[str] = field(default_factory=list, repr=False)

    @property
    def size(self) -> int:
        return len(self.tokens)

    def keys(self) -> list[str]:
        return self.tokens


def _strip_fragment(url: str) -> str:
    """Remove URL fragment (#...) for doc mapping."""
    parsed = urlparse(url)
    if parsed.fragment:
        parsed = parsed._replace(fragment="")
    return parsed.geturl()


def _read_doc_content_and_url(filepath: Path) -> tuple[str, str | None]:
    """
    Read document content and URL from a file.
    - .json: returns (content, url with fragment stripped). url from "url" key.
    - .html: returns (content, None).
    """
    filepath = Path(filepath)
    if filepath.suffix.lower() == ".json":
        data = json.loads(filepath.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"JSON file is not an object: {filepath}")
        if "content" not in data:
            raise ValueError(f"JSON file has no 'content' field: {filepath}")
        if not isinstance(data["content"], str):
            raise ValueError(f"JSON 'content' field is not a string: {filepath}")
        url = data.get("url")
        if url is not None:
            if not isinstance(url, str):
                raise ValueError(f"JSON 'url' field is not a string: {filepath}")
            url = _strip_fragment(url)
        return data["content"], url
    return read_html_file(filepath), None


def load_documents_from_directory(
    data_dir: Path,
    *,
    stem: bool = False,
) -> KeyRecordSet[Document]:
    """
    Load all HTML/JSON documents below data_dir (recursive) as key records.
    Files are visited in sorted path order and numbered from 0; unreadable
    files are skipped with a warning and do not consume an id.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Documents directory not found: {data_dir}")

    html_files = list(data_dir.rglob("*.html"))
    json_files = list(data_dir.rglob("*.json"))
    doc_files = sorted(html_files + json_files, key=lambda p: str(p))

    documents: KeyRecordSet[Document] = KeyRecordSet()
    for filepath in doc_files:
        try:
            content, url = _read_doc_content_and_url(filepath)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", filepath, e)
            continue

        if url is None:
            url = str(filepath.relative_to(data_dir)).replace("\\", "/")

        tokens = tokenize(extract_text_from_html(content))
        if stem:
            tokens = stem_tokens(tokens)
        documents.add(Document(record_id=len(documents), url=url, tokens=tokens))

    logger.debug("Loaded %d documents from %s", len(documents), data_dir)
    return documents
