"""Path naming for materialized page trees.

Maps page and attachment titles to the relative paths they are written to.
Three title transformations are used, each matching the layout the docs
pipeline expects:

- Page files keep their title as-is (spaces and case included) with only
  filesystem-unsafe characters removed: "Page title" -> "Page title.md"
- Page directories are slugs of the parent title: "Page title" -> "page-title"
- Attachments swap spaces for hyphens and keep their extension:
  "Attachment 1.png" -> "Attachment-1.png"
"""

import re
from typing import Sequence

# Characters that are invalid or problematic on common file systems,
# plus ASCII control characters.
_UNSAFE_CHARS = re.compile(r'[/\\?%*:|"<>\x00-\x1f\x7f]')


class PathNamer:
    """Computes deterministic relative paths for tree entries.

    All functions are pure. Distinct titles can still collide after
    sanitizing; colliding entries simply overwrite each other when the tree
    is materialized.

    Examples:
        >>> PathNamer.root_page_path("Page title")
        '/docs/Page title.md'
        >>> PathNamer.descendant_page_path(["Page title"], "Child")
        '/docs/page-title/Child.md'
        >>> PathNamer.attachment_path("Attachment 1.png")
        '/docs/attachments/Attachment-1.png'
    """

    DOCS_DIR = 'docs'
    ATTACHMENTS_DIR = 'attachments'
    FALLBACK_NAME = 'untitled'

    @staticmethod
    def _strip_unsafe(text: str) -> str:
        return _UNSAFE_CHARS.sub('', text)

    @classmethod
    def _or_fallback(cls, name: str) -> str:
        # "." and ".." must never become path segments
        if not name or set(name) == {'.'}:
            return cls.FALLBACK_NAME
        return name

    @classmethod
    def title_to_filename(cls, title: str) -> str:
        """Convert a page title to a markdown filename, keeping spaces and case.

        Examples:
            >>> PathNamer.title_to_filename("Page title")
            'Page title.md'
            >>> PathNamer.title_to_filename("Client/Server: Overview")
            'ClientServer Overview.md'
        """
        name = cls._strip_unsafe(title)
        name = re.sub(r'\s+', ' ', name).strip(' .')
        return f"{cls._or_fallback(name)}.md"

    @classmethod
    def title_to_directory(cls, title: str) -> str:
        """Convert a page title to a lowercase, hyphenated directory name.

        Examples:
            >>> PathNamer.title_to_directory("Page title")
            'page-title'
            >>> PathNamer.title_to_directory("  API Reference: v2  ")
            'api-reference-v2'
        """
        name = cls._strip_unsafe(title).lower()
        name = re.sub(r'\s+', '-', name.strip())
        name = re.sub(r'-{2,}', '-', name).strip('-.')
        return cls._or_fallback(name)

    @classmethod
    def attachment_filename(cls, title: str) -> str:
        """Convert an attachment title to a filename, preserving its extension.

        Examples:
            >>> PathNamer.attachment_filename("Attachment 1.png")
            'Attachment-1.png'
            >>> PathNamer.attachment_filename("Q3 report?.final.PDF")
            'Q3-report.final.PDF'
        """
        stem, dot, extension = title.rpartition('.')
        if not dot or not stem.strip():
            stem, extension = title, ''

        def clean(part: str) -> str:
            part = cls._strip_unsafe(part)
            part = re.sub(r'\s+', '-', part.strip())
            return re.sub(r'-{2,}', '-', part).strip('-')

        stem = cls._or_fallback(clean(stem))
        extension = clean(extension)
        return f"{stem}.{extension}" if extension else stem

    @classmethod
    def root_page_path(cls, title: str) -> str:
        """Path of the page the traversal started from."""
        return f"/{cls.DOCS_DIR}/{cls.title_to_filename(title)}"

    @classmethod
    def descendant_page_path(cls, ancestor_titles: Sequence[str], title: str) -> str:
        """Path of a descendant page.

        Only the immediate parent (the last ancestor) names the directory;
        a grandchild is nested under its parent's slug, not the full chain.

        Raises:
            ValueError: If ancestor_titles is empty
        """
        if not ancestor_titles:
            raise ValueError("descendant pages need at least one ancestor title")
        directory = cls.title_to_directory(ancestor_titles[-1])
        return f"/{cls.DOCS_DIR}/{directory}/{cls.title_to_filename(title)}"

    @classmethod
    def attachment_path(cls, title: str) -> str:
        """Path of an attachment; all attachments share one directory."""
        return f"/{cls.DOCS_DIR}/{cls.ATTACHMENTS_DIR}/{cls.attachment_filename(title)}"

    @classmethod
    def index_path(cls) -> str:
        """Path of the synthesized index. Intentionally has no leading slash."""
        return f"{cls.DOCS_DIR}/index.md"
