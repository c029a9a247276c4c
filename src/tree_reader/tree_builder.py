"""Tree builder for materializing a Confluence page hierarchy.

This module walks a page and all its descendants depth-first and produces
the ordered list of files that represents them: every attachment, every page
converted to markdown, and a synthesized index pointing at the root page.
"""

import logging
from typing import List, Optional, Sequence, Set
from urllib.parse import quote

from src.confluence_client.api_wrapper import APIWrapper
from src.content_converter.markdown_converter import MarkdownConverter
from src.models.confluence_page import PageRef
from src.models.tree_entry import EntryKind, TreeEntry
from .path_namer import PathNamer

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds the ordered file list for a page and its descendants.

    Pages are visited one at a time, depth-first. For each page the
    entries are emitted in this order:
    1. One entry per attachment, in host order
    2. The page itself, converted to markdown
    3. The entries of each child subtree, in host order
    The index entry is appended once the root's subtree is complete.

    A page id is visited at most once per build, so pages reachable from
    several parents (or through a cycle) are only emitted the first time.
    Any failure aborts the whole build; no partial list is returned.

    Example:
        >>> builder = TreeBuilder(APIWrapper(auth))
        >>> entries = builder.build("3032744732")
        >>> entries[-1].path
        'docs/index.md'
    """

    def __init__(
        self,
        api: APIWrapper,
        converter: Optional[MarkdownConverter] = None,
        namer: type = PathNamer
    ):
        """Initialize the tree builder.

        Args:
            api: PageClient used for all remote calls
            converter: HTML to markdown converter (default MarkdownConverter)
            namer: Path naming rules (default PathNamer)
        """
        self._api = api
        self._converter = converter or MarkdownConverter()
        self._namer = namer

    def build(self, root_page_id: str) -> List[TreeEntry]:
        """Build the complete entry list for a root page.

        Args:
            root_page_id: ID of the page to start from

        Returns:
            Entries in emission order, index entry last

        Raises:
            PageNotFoundError: If any page or attachment is missing
            InvalidCredentialsError / ForbiddenError: On auth failures
            RemoteError: On any other failed request
            ConversionError: If a page body cannot be converted
        """
        entries: List[TreeEntry] = []
        visited: Set[str] = set()

        logger.info(f"Building page tree from root page {root_page_id}")
        root = self._visit_page(
            page_id=root_page_id,
            ancestor_titles=[],
            visited=visited,
            entries=entries,
        )
        entries.append(self._index_entry(root))

        logger.info(
            f"Built page tree for '{root.title}': {len(visited)} page(s), "
            f"{len(entries)} file(s)"
        )
        return entries

    def _visit_page(
        self,
        page_id: str,
        ancestor_titles: Sequence[str],
        visited: Set[str],
        entries: List[TreeEntry]
    ) -> PageRef:
        """Emit one page's entries, then recurse into its children.

        Returns:
            PageRef of the visited page (is_root set for the root)
        """
        visited.add(page_id)
        is_root = not ancestor_titles

        page, html = self._api.get_page(page_id)
        if is_root:
            page = PageRef(id=page.id, title=page.title, version=page.version, is_root=True)
        markdown = self._converter.html_to_markdown(html)

        if is_root:
            page_path = self._namer.root_page_path(page.title)
        else:
            page_path = self._namer.descendant_page_path(ancestor_titles, page.title)

        for attachment in self._api.list_attachments(page_id):
            content = self._api.download_attachment(page_id, attachment.id)
            path = self._namer.attachment_path(attachment.title)
            logger.debug(f"Attachment {attachment.id} of page {page_id} -> {path}")
            entries.append(TreeEntry(path=path, content=content, kind=EntryKind.ATTACHMENT))

        logger.debug(f"Page {page_id} '{page.title}' -> {page_path}")
        entries.append(TreeEntry(
            path=page_path,
            content=markdown.encode('utf-8'),
            kind=EntryKind.PAGE,
        ))

        child_ancestors = [*ancestor_titles, page.title]
        for child in self._api.list_children(page_id):
            if child.id in visited:
                logger.warning(
                    f"Page {child.id} ('{child.title}') already visited - "
                    f"skipping duplicate reference from page {page_id}"
                )
                continue
            self._visit_page(
                page_id=child.id,
                ancestor_titles=child_ancestors,
                visited=visited,
                entries=entries,
            )

        return page

    def _index_entry(self, root: PageRef) -> TreeEntry:
        """Synthesize the index file that points readers at the root page."""
        index_path = self._namer.index_path()
        index_dir = index_path.rsplit('/', 1)[0]
        root_path = self._namer.root_page_path(root.title).lstrip('/')
        link = quote(root_path[len(index_dir) + 1:])

        content = f"# {root.title}\n\n[{root.title}]({link})\n"
        return TreeEntry(path=index_path, content=content.encode('utf-8'), kind=EntryKind.INDEX)
