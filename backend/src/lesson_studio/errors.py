class GenerationError(Exception):
    """Base class for failures raised by the activity generation pipeline.

    The batch planner fills in ``lesson_id`` and ``activity_number`` when an
    error escapes one of its entries; the error type itself is never changed.
    """

    lesson_id: str | None = None
    activity_number: int | None = None


class NotFoundError(GenerationError):
    pass


class ConfigurationError(GenerationError):
    pass


class UnsupportedTypeError(GenerationError):
    def __init__(self, activity_type: str):
        self.activity_type = activity_type
        super().__init__(f"Unsupported activity type: {activity_type}")


class ContentGenerationError(GenerationError):
    def __init__(self, content_type: str, reason: str):
        self.content_type = content_type
        self.reason = reason
        label = content_type.replace("_", " ")
        super().__init__(f"Failed to generate {label} content: {reason}")
