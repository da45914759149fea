import logging

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger(__name__)

MD_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

FORBIDDEN_PROTOCOLS = ("javascript:", "vbscript:", "data:")

URL_ATTRIBUTES = ("href", "src")


def is_safe_url(url: str) -> bool:
    # browsers drop whitespace and control characters inside the scheme
    compact = "".join(ch for ch in url if ch > " ").lower()
    return not compact.startswith(FORBIDDEN_PROTOCOLS)


class StripUnsafeUrls(Treeprocessor):
    def run(self, root):
        for element in root.iter():
            for attr in URL_ATTRIBUTES:
                url = element.get(attr)
                if url is not None and not is_safe_url(url):
                    logger.debug(f"Dropping unsafe {attr} on <{element.tag}>: {url}")
                    del element.attrib[attr]


class EscapeHtmlExtension(Extension):
    """Treat raw HTML in user text as text: authors must not inject markup."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # after "inline" (20) has turned links and images into elements
        md.treeprocessors.register(StripUnsafeUrls(md), "strip_unsafe_urls", 5)


def markdown_to_html(text: str) -> str:
    md = markdown.Markdown(extensions=[*MD_EXTENSIONS, EscapeHtmlExtension()])
    return md.convert(text)
