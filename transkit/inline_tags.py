import re
from typing import Iterable, Optional, Pattern

# HTML elements that never have content
VOID_ELEMENT_NAMES = (
    "area",
    "base",
    "br",
    "col",
    "command",
    "embed",
    "hr",
    "img",
    "input",
    "keygen",
    "link",
    "menuitem",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
)

DEFAULT_KEEP_BASIC_HTML_NODES = (
    "br",
    "strong",
    "i",
    "p",
)

# Any opening, closing or self-closing tag, attribute values may contain ">"
TAG_REGEX = re.compile(r"""<[a-zA-Z0-9\-!/](?:"[^"]*"|'[^']*'|[^'">])*>""")

TAG_NAME_REGEX = re.compile(r"</?([^\s]+?)[/\s>]")

# name="value" / name='value' pairs, or bare attribute names
ATTR_REGEX = re.compile(r"""\s([^'"/\s><]+?)[\s/>]|([^\s=]+)=\s?(".*?"|'.*?')""")


def keep_tags_regex(keep: Iterable[str]) -> Optional[Pattern]:
    """Matches the opening of any kept tag (e.g. "<br"); None when nothing is kept."""
    names = [re.escape(name) for name in keep]
    if not names:
        return None
    return re.compile("|".join(f"<{name}" for name in names))
