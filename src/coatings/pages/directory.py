"""Directory-backed page store used by the CLI and the development server.

Layout::

    pages/
        MediaWiki/Coatings-applications.json
        Template/Infobox
        Style/Base.css
        Style/Theme.less

Each namespace is a directory named after its canonical name (``Main`` for
the main namespace) and each file is one page. The file's modification time
stands in for the revision id, so editing a file produces a new revision.
"""

from __future__ import annotations

import logging
import zlib
from pathlib import Path

from coatings.model.page import Namespace, Page, PageTitle, default_content_model

logger = logging.getLogger(__name__)

_MAIN_DIR = "Main"


def _namespace_dir(namespace: Namespace) -> str:
    return namespace.canonical_name or _MAIN_DIR


class DirectoryPageStore:
    """Read-only page store over a directory tree."""

    def __init__(
        self,
        root: str | Path,
        interwiki_prefixes: tuple[str, ...] = ("wikipedia", "commons", "meta"),
        template_css_model: bool = False,
    ) -> None:
        self.root = Path(root)
        self.interwiki_prefixes = interwiki_prefixes
        self._template_css_model = template_css_model

    def path_for(self, title: PageTitle) -> Path:
        """Return the file holding *title*; ValueError if it lies outside the root."""
        path = self.root / _namespace_dir(title.namespace) / title.text
        if not path.resolve().is_relative_to(self.root.resolve()):
            raise ValueError(f"{title} is outside {self.root}")
        return path

    def get_page(self, title: PageTitle) -> Page | None:
        if title.is_external:
            return None
        try:
            path = self.path_for(title)
        except ValueError:
            logger.warning("Refusing to read %s from outside the pages directory", title)
            return None
        try:
            text = path.read_text(encoding="utf-8")
            stat = path.stat()
        except (FileNotFoundError, IsADirectoryError):
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read page %s from %s: %s", title, path, exc)
            return None
        return Page(
            title=title,
            page_id=zlib.crc32(title.prefixed_text.encode("utf-8")),
            revision_id=stat.st_mtime_ns,
            content_model=default_content_model(title, self._template_css_model),
            text=text,
        )

    def titles(self) -> list[PageTitle]:
        titles: list[PageTitle] = []
        for namespace in Namespace:
            directory = self.root / _namespace_dir(namespace)
            if not directory.is_dir():
                continue
            for path in sorted(directory.iterdir()):
                if path.is_file():
                    titles.append(PageTitle(namespace=namespace, text=path.name))
        return titles
