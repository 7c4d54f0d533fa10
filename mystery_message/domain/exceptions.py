"""
Domain exception hierarchy for Mystery Message.

Use cases raise these; the API layer maps each family to an HTTP status and
a ``{"success": false, "message": ...}`` body. Every exception carries a
user-facing message.
"""


class MysteryMessageError(Exception):
    """Base exception for all domain errors."""

    default_message = "An error occurred. Please try again."

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(MysteryMessageError):
    """No session or the session token is invalid."""
    default_message = "Not authenticated"


# Lookups

class NotFoundError(MysteryMessageError):
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class MessageNotFoundError(NotFoundError):
    default_message = "Message not found or already deleted"


# Uniqueness

class DuplicateKeyError(MysteryMessageError):
    """A unique index (username or email) rejected the write."""
    default_message = "Username or email is already registered"


class UsernameTakenError(DuplicateKeyError):
    default_message = "Username is already taken"


class EmailTakenError(DuplicateKeyError):
    default_message = "User already exists with this email"


# Verification

class VerificationError(MysteryMessageError):
    pass


class InvalidCodeError(VerificationError):
    default_message = "Incorrect verification code"


class CodeExpiredError(VerificationError):
    default_message = "Verification code has expired. Please sign up again to get a new code."


# Sign in

class AuthenticationError(MysteryMessageError):
    default_message = "Invalid credentials"


class NoSuchUserError(AuthenticationError):
    default_message = "No user found with this email or username"


class NotVerifiedError(AuthenticationError):
    default_message = "Please verify your account before login"


class BadCredentialsError(AuthenticationError):
    default_message = "Incorrect password"


# Messaging

class NotAcceptingMessagesError(MysteryMessageError):
    default_message = "User is not accepting messages"


# Collaborators

class EmailDeliveryError(MysteryMessageError):
    default_message = "Failed to send verification email"


class SuggestionUnavailableError(MysteryMessageError):
    default_message = "Message suggestions are unavailable right now"
