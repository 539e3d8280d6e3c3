"""
Markup parser for translation strings.

Turns "a <0>b</0> <br/>" into a list of MarkupTag / MarkupText nodes. Tag names can be
numbers, which is why this is a small regex tokenizer and not an XML/HTML parser: both
reject "<0>" as a tag. The lenient mode mirrors what browsers-side parsers do with
translator mistakes (stray closing tags are ignored, unclosed tags swallow the rest);
strict mode raises MarkupParseError instead.
"""
from typing import List, Optional

from transkit.errors import MarkupParseError
from transkit.inline_tags import ATTR_REGEX, TAG_NAME_REGEX, TAG_REGEX, VOID_ELEMENT_NAMES
from transkit.nodes import MarkupNode, MarkupTag, MarkupText


def parse_tag(tag: str) -> Optional[MarkupTag]:
    """Parses a single "<name attr='x'>" token. Returns None for comments."""
    res = MarkupTag(name="")
    match = TAG_NAME_REGEX.search(tag)
    if match:
        res.name = match.group(1)
        if res.name.startswith("!--"):
            return None
        if res.name in VOID_ELEMENT_NAMES or tag[-2:-1] == "/":
            res.void = True

    pos = 0
    while True:
        found = ATTR_REGEX.search(tag, pos)
        if found is None:
            break
        pos = found.end()
        if found.group(1):
            attr = found.group(1).strip()
            name, value = attr, ""
            if "=" in attr:
                parts = attr.split("=")
                name, value = parts[0], parts[1]
            res.attrs[name] = value
            # the delimiter may open the next attribute
            pos -= 1
        elif found.group(2):
            res.attrs[found.group(2)] = found.group(3).strip()[1:-1]
    return res


def _text_until_next_tag(markup: str, start: int) -> tuple:
    end = markup.find("<", start)
    return (markup[start:] if end == -1 else markup[start:end]), end


def _push_trailing_text(markup: str, start: int, level: int, parent: List[MarkupNode]):
    if start >= len(markup) or markup[start] == "<":
        return
    content, end = _text_until_next_tag(markup, start)
    # whitespace-only runs collapse to a single space
    if not content.strip():
        content = " "
    # drop leading and trailing whitespace-only text nodes
    if (end > -1 and level + len(parent) >= 0) or content != " ":
        parent.append(MarkupText(content))


def parse(markup: str, strict: bool = False) -> List[MarkupNode]:
    """
    Parses `markup` into a list of top-level nodes.

    Args:
        markup: the translation string, usually wrapped in a synthetic "<0>…</0>".
        strict: raise MarkupParseError on stray closing tags and unclosed tags
                instead of tolerating them.
    """
    if not isinstance(markup, str):
        raise MarkupParseError(f"Markup must be a string, got {type(markup).__name__}")

    result: List[MarkupNode] = []
    stack: List[MarkupTag] = []
    level = -1
    current: Optional[MarkupTag] = None

    # text before the first tag
    if not markup.startswith("<"):
        content, _ = _text_until_next_tag(markup, 0)
        result.append(MarkupText(content))

    for match in TAG_REGEX.finditer(markup):
        tag = match.group(0)
        is_open = tag[1] != "/"
        start = match.end()
        next_char = markup[start:start + 1]

        if tag.startswith("<!--"):
            _push_trailing_text(markup, start, level, result if level == -1 else stack[level].children)
            continue

        if is_open:
            parsed = parse_tag(tag)
            if parsed is None:
                continue
            current = parsed
            level += 1

            if not current.void and next_char and next_char != "<":
                content, _ = _text_until_next_tag(markup, start)
                current.children.append(MarkupText(content))

            if level == 0:
                result.append(current)
            else:
                stack[level - 1].children.append(current)

            if level < len(stack):
                stack[level] = current
            else:
                stack.append(current)

        if not is_open or current.void:
            closes_current = current is not None and (current.void or current.name == tag[2:-1])
            if level > -1 and closes_current:
                level -= 1
                current = stack[level] if level > -1 else None
            elif strict and not is_open:
                raise MarkupParseError(f"Unexpected closing tag {tag} at position {match.start()}")

            _push_trailing_text(markup, start, level, result if level == -1 else stack[level].children)

    if strict and level > -1:
        raise MarkupParseError(f"Unclosed tag <{stack[level].name}>")

    return result
