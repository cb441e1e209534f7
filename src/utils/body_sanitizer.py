"""HTML to plain text conversion for log previews of outgoing emails."""

import html
import re

from bs4 import BeautifulSoup

_WHITESPACE_RUN = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")


def html_to_text(text: str) -> str:
    """Convert HTML to plain text, preserving block structure as newlines."""
    if not text or not text.strip():
        return ""

    soup = BeautifulSoup(text, "lxml")

    for el in soup(["script", "style", "head", "meta", "link", "title"]):
        el.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(["p", "div", "tr", "li"]):
        tag.insert_before("\n")
        tag.insert_after("\n")
    for tag in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        tag.insert_before("\n\n")
        tag.insert_after("\n")

    plain = html.unescape(soup.get_text(separator=" "))
    plain = _WHITESPACE_RUN.sub(" ", plain)
    plain = _BLANK_LINES.sub("\n\n", plain)
    return "\n".join(line.strip() for line in plain.strip().splitlines())


def text_preview(body: str, limit: int = 300) -> str:
    """First `limit` characters of the plain-text rendering, with an ellipsis when cut."""
    plain = html_to_text(body)
    if len(plain) <= limit:
        return plain
    return plain[:limit].rstrip() + "..."
