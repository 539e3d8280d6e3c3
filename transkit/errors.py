class TranskitError(Exception):
    """Base class for errors raised by transkit."""


class MarkupParseError(TranskitError, ValueError):
    """Raised when a translation string cannot be tokenized into tags and text."""


class OptionsError(TranskitError, ValueError):
    """Raised for unknown or badly typed Trans options."""


class NodeCodecError(TranskitError, ValueError):
    """Raised when a JSON document does not describe a node tree."""
