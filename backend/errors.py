#errors.py


class DocChatError(Exception):
    """Base for every failure that is reported back to the user as an alert."""

    status_code = 400
    default_message = "Something went wrong."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(DocChatError):
    default_message = "Please select a file."


class UnsupportedFormat(DocChatError):
    status_code = 415
    default_message = "Unsupported file type. Please upload a PDF, Word, or Excel file."


class ParseError(DocChatError):
    status_code = 422

    def __init__(self, kind, detail):
        self.kind = kind
        self.detail = detail
        super().__init__(f"Error processing {kind} file: {detail}")


class InvalidLink(DocChatError):
    default_message = "Invalid Google Docs/Sheets link"


class LinkFetchError(DocChatError):
    status_code = 502
    default_message = "Error processing Google Docs/Sheets link"


class ModelError(DocChatError):
    # Never reaches the client: model.get_ai_response turns it into FALLBACK_ANSWER
    status_code = 502
    default_message = "Error generating content."


class InvalidTransition(DocChatError):
    status_code = 409

    def __init__(self, action, mode):
        self.action = action
        self.mode = mode
        super().__init__(f"Cannot {action} while the session is {mode}.")


class SessionNotFound(DocChatError):
    status_code = 404
    default_message = "Session not found."
