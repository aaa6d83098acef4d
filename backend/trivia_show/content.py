"""Content providers: where raw trivia categories come from.

The engine only needs ``fetch_category(category_id) -> RawCategory`` and
treats it as a single-shot read. Any transport or decode problem surfaces
as ``ContentFetchError``.
"""
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from trivia_show.models import RawCategory, RawClue
from trivia_show.services.trivia.errors import ContentFetchError


class ContentProvider(Protocol):
    def fetch_category(self, category_id: Any) -> RawCategory:
        ...


def parse_category(payload: Mapping[str, Any], category_id: Any = None) -> RawCategory:
    """Build a RawCategory from a ``{title, clues: [{question, answer}]}`` document."""
    try:
        title = payload['title']
        clues = [
            RawClue(question=c.get('question') or '', answer=c.get('answer') or '')
            for c in payload['clues']
        ]
    except (KeyError, TypeError, AttributeError) as exc:
        raise ContentFetchError(f"Malformed category {category_id!r}: {exc}", category_id) from exc
    return RawCategory(title=title or '', clues=clues)


class JServiceProvider:
    """Reads categories from a jService-style API (``GET /category?id=<id>``)."""

    def __init__(self, base_url: str = 'https://jservice.io/api', timeout: float = 10, max_retries: int = 3,
                 session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        if session is None:
            # Session with retries for 429/5xx
            session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=Retry(
                    total=max_retries,
                    backoff_factor=0.5,
                    status_forcelist=(408, 429, 500, 502, 503, 504),
                    allowed_methods=frozenset(['GET']),
                    raise_on_status=False,
                )
            )
            session.mount('https://', adapter)
            session.mount('http://', adapter)
        self.session = session

    def fetch_category(self, category_id: Any) -> RawCategory:
        url = f"{self.base_url}/category"
        try:
            resp = self.session.get(url, params={'id': category_id}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ContentFetchError(f"Request for category {category_id!r} failed: {exc}", category_id) from exc
        if resp.status_code != 200:
            raise ContentFetchError(
                f"Category {category_id!r}: non-200 {resp.status_code} body={resp.text[:200]}", category_id
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise ContentFetchError(f"Category {category_id!r}: invalid JSON", category_id) from exc
        return parse_category(payload, category_id)


class StaticContentProvider:
    """Serves categories from memory, keyed by id."""

    def __init__(self, categories: Mapping[Any, Any]):
        self._categories: Dict[Any, RawCategory] = {}
        for key, value in categories.items():
            self._categories[key] = value if isinstance(value, RawCategory) else parse_category(value, key)

    @classmethod
    def from_json_file(cls, path) -> 'StaticContentProvider':
        """Load ``{"<id>": {"title": ..., "clues": [...]}}``. Ids that look numeric become ints."""
        with Path(path).open(encoding='utf-8') as fh:
            document = json.load(fh)
        categories = {}
        for key, value in document.items():
            categories[int(key) if str(key).isdigit() else key] = value
        return cls(categories)

    @property
    def category_ids(self):
        return list(self._categories)

    def fetch_category(self, category_id: Any) -> RawCategory:
        try:
            return self._categories[category_id]
        except KeyError:
            raise ContentFetchError(f"Unknown category {category_id!r}", category_id) from None
