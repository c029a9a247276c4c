"""Markdown converter for Confluence export_view HTML.

Converts the rendered HTML body of a Confluence page into markdown using
markdownify. BeautifulSoup strips nodes that carry no document content
(scripts, styles) before conversion. The converter has no knowledge of the
page tree and is deterministic for a given input.
"""

import re

from bs4 import BeautifulSoup
from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..confluence_client.errors import ConversionError


class _CustomMarkdownConverter(BaseMarkdownConverter):
    """Custom markdownify converter with Confluence-friendly settings."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')  # Use # style headings
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        super().__init__(**options)

    def _is_in_table_cell(self, parent_tags):
        return 'td' in parent_tags or 'th' in parent_tags

    def convert_p(self, el, text, parent_tags):
        """Convert paragraph, keeping paragraph breaks inside table cells.

        Confluence renders multi-line table cell content as several <p>
        tags; inside a cell each one ends with a newline that convert_td
        turns into <br>.
        """
        text = text.strip()
        if not text:
            return ''

        if self._is_in_table_cell(parent_tags):
            return text + '\n'

        if '_inline' in parent_tags:
            return ' ' + text + ' '
        return '\n\n%s\n\n' % text

    def _convert_cell(self, el, text):
        colspan = 1
        if 'colspan' in el.attrs and el['colspan'].isdigit():
            colspan = max(1, min(1000, int(el['colspan'])))
        cell_text = text.strip().replace('\n', '<br>')
        while '<br><br>' in cell_text:
            cell_text = cell_text.replace('<br><br>', '<br>')
        while cell_text.endswith('<br>'):
            cell_text = cell_text.removesuffix('<br>')
        return ' ' + cell_text + ' |' * colspan

    def convert_td(self, el, text, parent_tags):
        return self._convert_cell(el, text)

    def convert_th(self, el, text, parent_tags):
        return self._convert_cell(el, text)

    def convert_br(self, el, text, parent_tags):
        """Convert <br>, keeping it as literal HTML inside table cells."""
        if self._is_in_table_cell(parent_tags):
            return '<br>'
        if '_inline' in parent_tags:
            return ' '
        if self.options['newline_style'].lower() == 'backslash':
            return '\\\n'
        return '  \n'


class MarkdownConverter:
    """Converts Confluence page HTML to markdown.

    Example:
        >>> MarkdownConverter().html_to_markdown('<p>Docs html goes here!</p>')
        'Docs html goes here!\\n'
    """

    # Elements dropped before conversion
    STRIPPED_TAGS = ('script', 'style', 'noscript')

    def html_to_markdown(self, html: str) -> str:
        """Convert page HTML to markdown.

        Args:
            html: export_view HTML of a Confluence page

        Returns:
            Markdown text ending in a single newline, or "" for an empty body

        Raises:
            ConversionError: If parsing or conversion fails
        """
        if not html or not html.strip():
            return ""

        try:
            soup = BeautifulSoup(html, 'html.parser')
            for tag in soup.find_all(self.STRIPPED_TAGS):
                tag.decompose()
            markdown = _CustomMarkdownConverter().convert_soup(soup)
        except Exception as e:
            raise ConversionError(f"Markdownify conversion failed: {e}") from e

        markdown = re.sub(r'\n{3,}', '\n\n', markdown).strip()
        return markdown + '\n' if markdown else ""
