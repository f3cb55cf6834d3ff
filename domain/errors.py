from typing import Optional


class CVServiceError(Exception):
    """Base for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(CVServiceError):
    status_code = 400


class InvalidFileType(InvalidRequest):
    def __init__(self, filename: str, media_type: Optional[str]):
        super().__init__(
            f"Invalid file type for '{filename}' ({media_type or 'unknown'}). "
            "Only PDF, DOC, DOCX, and TXT files are allowed "
            "(.doc files must be in the Word 2007+ format)."
        )
        self.filename = filename
        self.media_type = media_type


class MissingRequiredPart(InvalidRequest):
    pass


class TooManyFiles(InvalidRequest):
    pass


class InvalidFieldValue(InvalidRequest):
    pass


class ExtractionFailed(CVServiceError):
    def __init__(self, filename: str, reason: str):
        super().__init__(f"Failed to extract text from '{filename}': {reason}")
        self.filename = filename


class UnsupportedFormat(ExtractionFailed):
    def __init__(self, filename: str, media_type: Optional[str]):
        super().__init__(filename, f"unsupported media type {media_type!r}")
        self.media_type = media_type


class UpstreamCallFailed(CVServiceError):
    pass


class RenderFailed(CVServiceError):
    pass


class ResponseParseFailed(CVServiceError):
    # absorbed by the response normalizer, never reaches the HTTP layer
    pass
