# Exceptions
#
# Configuration errors (invalid declarations, bad meta results, unmapped primary objects)
# are raised to the caller. Data-shape ambiguities (unknown include segments,
# unregistered related types) are never raised, they're logged and omitted.
#
# The status_code is provided for the http layer that may map these errors to a response:
# {
#      "title": "Invalid Meta Result: ",
#      "detail": "...",
#      "code": 500
# }
#
from http import HTTPStatus
from sqlalchemy.exc import DontWrapMixin
import jares


class JsonapiError(Exception, DontWrapMixin):
    """
    Base class for the jares exceptions
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""

    def __init__(self, message="", status_code=None):
        Exception.__init__(self, self.message + message)
        if status_code is not None:
            self.status_code = status_code
        self.message = self.message + message

    def __str__(self):
        return self.message


class InvalidMetaResult(JsonapiError):
    """
    This exception is raised when a resource `meta()` override doesn't return a dict
    """

    message = "Invalid Meta Result: "

    def __init__(self, message="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        JsonapiError.__init__(self, message, status_code)
        jares.log.error("InvalidMetaResult: %s", message)


class ResourceDefinitionError(JsonapiError):
    """
    This exception is raised when a resource class declares invalid attributes or relationships
    """

    message = "Resource Definition Error: "

    def __init__(self, message="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        JsonapiError.__init__(self, message, status_code)
        jares.log.error("ResourceDefinitionError: %s", message)


class UnknownResourceError(JsonapiError):
    """
    This exception is raised when no resource class is registered for a primary object
    """

    message = "Unknown Resource: "

    def __init__(self, message="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        JsonapiError.__init__(self, message, status_code)
        jares.log.error("UnknownResourceError: %s", message)
