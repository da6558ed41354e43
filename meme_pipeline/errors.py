"""
Error types surfaced by the meme pipeline.

Every error raised by the pipeline derives from `MemeGenerationError`, and its
message is already suitable for showing to an end user.
"""

REALTIME_FETCH_FAILED = (
    "Failed to fetch real-time trends. Please try again or turn off real-time trends."
)
EDITED_IMAGE_MISSING = "API did not return an edited image. Please try again."
GENERATED_IMAGE_MISSING = (
    "API did not return an image. Please try a different character description."
)
UNKNOWN_ERROR = "An unknown error occurred while generating the meme."
INVALID_IMAGE = "Please upload a valid image file (JPEG, PNG, WebP)."
BLANK_CHARACTER = "Please enter a character description."


class MemeGenerationError(Exception):
    pass


class ValidationError(MemeGenerationError):
    """Invalid user input, detected before the pipeline is invoked."""


class RealtimeFetchError(MemeGenerationError):
    def __init__(self, message: str = REALTIME_FETCH_FAILED) -> None:
        super().__init__(message)


class GenerationError(MemeGenerationError):
    """A remote image call succeeded but produced no usable image."""


class RemoteCallError(MemeGenerationError):
    pass


class UnknownError(MemeGenerationError):
    def __init__(self, message: str = UNKNOWN_ERROR) -> None:
        super().__init__(message)
