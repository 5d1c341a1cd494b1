class StoryboardError(Exception):
    """Base class for every failure surfaced by the storyboard core."""


class IngestionError(StoryboardError):
    """An uploaded file could not be turned into an image; the whole batch is rejected."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Error processing image '{filename}': {reason}")


class OperationBusyError(StoryboardError):
    """The operation is already in flight for this session."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"'{operation}' is already in progress.")


class UpstreamError(StoryboardError):
    pass


class UpstreamContractError(UpstreamError):
    """The generation service answered, but not with the shape we asked for."""


class UpstreamTransportError(UpstreamError):
    """The generation service could not be reached or returned an API error."""


class UpstreamConfigurationError(UpstreamError):
    """No usable client could be built (missing API key or credentials)."""


class AnalysisFailedError(StoryboardError):
    user_message = "Analysis failed. Please check your configuration."


class ShotGenerationFailedError(StoryboardError):
    user_message = "Shot generation failed."
