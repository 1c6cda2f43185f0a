OUT_OF_SCOPE_MESSAGE = (
    "This AI tool only answers WordPress-related questions. "
    "Please ask about WordPress themes, plugins, development, hooks, or functionality."
)
INVALID_REQUEST_MESSAGE = "Please provide a valid question."
COMPLETION_FAILED_MESSAGE = "An error occurred while generating the response"
PACKAGING_FAILED_MESSAGE = "Failed to generate theme zip file"
EMPTY_FILE_SET_MESSAGE = "No theme files to package."
INVALID_FILES_MESSAGE = "Please provide theme files as a mapping of file name to content."


class AssistantError(Exception):
    """Base class for failures scoped to a single assistant request."""

    default_message = COMPLETION_FAILED_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(AssistantError):
    default_message = INVALID_REQUEST_MESSAGE


class OutOfScopeError(AssistantError):
    default_message = OUT_OF_SCOPE_MESSAGE


class CompletionError(AssistantError):
    """Provider call failed; ``message`` is the provider's text when it had one."""

    default_message = COMPLETION_FAILED_MESSAGE


class PackagingError(AssistantError):
    default_message = PACKAGING_FAILED_MESSAGE


class EmptyFileSetError(PackagingError):
    default_message = EMPTY_FILE_SET_MESSAGE
