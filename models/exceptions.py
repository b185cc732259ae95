"""Error taxonomy for the AI layer and the record store"""


class AIServiceError(Exception):
    """Base error for the chat-completion integration"""

    retriable = False
    user_message = "Temporary AI service issue. Please try again."


class AuthError(AIServiceError):
    """Missing or rejected API credential"""

    user_message = "API key issue. Please check your AI API key configuration."


class RateLimited(AIServiceError):
    """Upstream rate limit hit"""

    retriable = True
    user_message = "Rate limit reached. Please wait a moment and try again."


class ServiceUnavailable(AIServiceError):
    """Upstream returned a server error"""

    retriable = True
    user_message = "AI service temporarily unavailable. Please try again later."


class NetworkError(AIServiceError):
    """Connection failure or per-attempt timeout"""

    retriable = True
    user_message = "Network connection issue. Please check your internet connection."


class MalformedResponse(AIServiceError):
    """Model reply was empty or not the expected JSON shape"""


class UnknownError(AIServiceError):
    """Anything not covered above"""


class DatabaseError(Exception):
    """Record store failure"""

    pass
