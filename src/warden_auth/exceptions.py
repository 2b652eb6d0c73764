"""Authentication exceptions.

These exceptions are raised by the warden_auth package and should be
caught and handled by the application layer (AuthenticationService,
PasswordResetService) or the transport in front of it.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when an input is malformed or misses a required field."""

    def __init__(self, message: str = "Invalid input", errors: list | None = None):
        self.errors = errors or []
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class HashingError(AuthError):
    """Raised when the underlying hashing primitive fails."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when a password does not match the stored hash."""

    def __init__(self, message: str = "Incorrect password!"):
        super().__init__(message)
