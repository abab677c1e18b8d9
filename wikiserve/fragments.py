"""Shared HTML fragments ("components") and placeholder composition.

Every HTML page the server returns may contain ``{{ head }}``,
``{{ navbar }}`` and ``{{ footer }}`` placeholders. ``compose`` swaps them
for the matching fragment from a ``FragmentSource``:

- ``LiveFragments`` re-reads ``<components_dir>/<name>.html`` on each call,
  so edits show up on the next request.
- ``CachedFragments`` reads from a ``FragmentCache`` filled once by
  ``preload`` at startup.

The source is picked once, when the app is built (see
``make_fragment_source``), and handed to the request handlers.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Protocol, Tuple

from .config import FRAGMENT_NAMES
from .paths import load_text

logger = logging.getLogger(__name__)


class RWLock:
    """Reader/writer lock: many concurrent readers, one exclusive writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class FragmentCache:
    """Fragment name → HTML, shared by all requests.

    Writes only happen during ``preload``; at request time the cache is
    read-only. Names whose file could not be loaded map to "".
    """

    def __init__(self) -> None:
        self._lock = RWLock()
        self._fragments: Dict[str, str] = {}

    def store(self, name: str, html: str) -> None:
        with self._lock.write():
            self._fragments[name] = html

    def get(self, name: str) -> Optional[str]:
        with self._lock.read():
            return self._fragments.get(name)

    def names(self) -> Tuple[str, ...]:
        with self._lock.read():
            return tuple(self._fragments)


def fragment_path(components_dir: Path, name: str) -> Path:
    return Path(components_dir) / f"{name}.html"


def preload(components_dir: Path, names: Iterable[str] = FRAGMENT_NAMES) -> FragmentCache:
    """Load every named fragment into a new cache.

    A missing or unreadable fragment file never fails startup; it is
    stored as an empty string.
    """
    logger.info("[Fragments] Preloading components from %s", components_dir)
    cache = FragmentCache()
    for name in names:
        html = load_text(fragment_path(components_dir, name))
        if html is None:
            logger.warning("[Fragments] Component %r not found, using empty string", name)
        cache.store(name, html or "")
        logger.debug("[Fragments] Preloaded component: %s", name)
    logger.info("[Fragments] Preloaded components: %s", ", ".join(cache.names()))
    return cache


class FragmentSource(Protocol):
    def lookup(self, name: str) -> Optional[str]:
        """Return the fragment's HTML, or None to leave its placeholder alone."""


class LiveFragments:
    """Reload each fragment from disk on every lookup."""

    def __init__(self, components_dir: Path) -> None:
        self.components_dir = Path(components_dir)

    def lookup(self, name: str) -> Optional[str]:
        logger.debug("[Fragments] Live mode: reloading component %r from disk", name)
        return load_text(fragment_path(self.components_dir, name))


class CachedFragments:
    """Serve fragments from a preloaded ``FragmentCache``."""

    def __init__(self, cache: FragmentCache) -> None:
        self.cache = cache

    def lookup(self, name: str) -> Optional[str]:
        logger.debug("[Fragments] Cached mode: using cached component %r", name)
        return self.cache.get(name)


def make_fragment_source(components_dir: Path, live: bool) -> FragmentSource:
    """Build the fragment source for the process's operating mode.

    Components are preloaded in both modes, so a missing component file
    is reported at startup either way.
    """
    cache = preload(components_dir)
    if live:
        return LiveFragments(components_dir)
    return CachedFragments(cache)


def placeholder(name: str) -> str:
    return "{{ " + name + " }}"


def compose(template: str, source: FragmentSource, names: Iterable[str] = FRAGMENT_NAMES) -> str:
    """Replace every ``{{ name }}`` in ``template`` with its fragment.

    Names are processed in order. A name the source cannot supply keeps
    its placeholder verbatim; placeholders for names outside ``names``
    are never touched.
    """
    result = template
    for name in names:
        html = source.lookup(name)
        if html is not None:
            result = result.replace(placeholder(name), html)
    return result
