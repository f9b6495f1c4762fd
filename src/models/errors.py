"""
Error taxonomy of a presentation request

Two independent families:
    - SlideShowFatalError: broken invariants; generation is aborted and
      the error is never caught inside the engine.
    - GenerationError: the request cannot produce output (missing template,
      broken skin); callers report it and produce nothing.

Missing media resources or attributes are not errors at all: they fall
back to defaults.
"""


class SlideShowFatalError(Exception):
    """Unrecoverable engine failure"""
    pass


class MalformedTreeError(SlideShowFatalError):
    """
    Raised when the document tree violates its structural invariants
    (an extension node without exactly one name).
    """
    pass


class GenerationError(Exception):
    """Presentation generation failed; no output is produced"""
    pass


class TemplateNotFoundError(GenerationError):
    """The presentation template could not be loaded"""
    pass


class SkinError(GenerationError):
    """Raised when skin loading or validation fails"""
    pass
