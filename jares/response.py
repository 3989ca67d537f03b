# Response class
from flask import Response


class JaresResponse(Response):
    """
    Response class, JSON:API documents are sent with the "application/vnd.api+json" content type
    """

    default_mimetype = "application/vnd.api+json"
