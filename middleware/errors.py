"""
Centralized custom exception definitions for the member login application.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, allowing clean integration with Flask's error system and
JSON-formatted responses.

Domain Groups:
--------------
1. Authentication Errors (500)
2. System Errors (500)

Rejected credentials and rejected back URLs are *not* errors: the login
handler reports the former as a failed outcome and silently skips the latter.
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ==============================================================================
# 1. AUTHENTICATION ERRORS (HTTP 500)
# ==============================================================================

class IdentityBindError(BaseAppError):
    """
    Raised when the identity store could not bind an authenticated member
    to the session. The login must not be reported as successful.
    """
    code = 500
    description = "Could not establish a session for the authenticated member"


# ==============================================================================
# 2. SYSTEM ERRORS (HTTP 500)
# ==============================================================================

class ConfigurationError(BaseAppError):
    code = 500
    description = "Configuration missing or invalid"
