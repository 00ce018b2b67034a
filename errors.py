"""Errors returned to the caller, each with a fixed user-safe message and an HTTP status."""


class AnalyzerError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(AnalyzerError):
    status_code = 400


class ConfigurationError(AnalyzerError):
    status_code = 500


class ExtractionError(AnalyzerError):
    """Content could not be loaded from the source."""

    status_code = 400

    def __init__(self, message, source=None):
        super().__init__(message)
        self.source = source


class AnalysisError(AnalyzerError):
    status_code = 500
