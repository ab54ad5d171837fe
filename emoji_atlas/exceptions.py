"""Errors that end an atlas build (or an atlas read-back) as a whole."""


class AtlasError(Exception):
    """Base class for every fatal atlas error."""


class ConfigurationError(AtlasError):
    """Settings that cannot produce an atlas (non-positive tile size, ...)."""


class InputUnavailableError(AtlasError):
    """The code point list is missing or cannot be read."""


class EmptyInputError(AtlasError):
    """The code point list was read but holds no usable record."""


class FontUnavailableError(AtlasError):
    """No font could be loaded for rasterizing glyphs."""


class CanvasAllocationError(AtlasError):
    """The atlas canvas could not be created."""


class OutputWriteError(AtlasError):
    """The output directory, image or JSON document could not be written.

    Files are written in place without atomic replacement. After this error any
    atlas file left in the output directory must be treated as invalid.
    """


class AtlasDocumentError(AtlasError):
    """An atlas JSON document is not shaped like the builder writes it."""
