# jares to json encoding

import datetime
import decimal
import json
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import jares
from typing import Any


class _JaresJSONEncoder:
    """
    JSON encoding for jares objects (Resource instances and common types)
    """

    # pylint: disable=too-many-return-statements
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if obj is None:
            return None
        if hasattr(obj, "jsonapi_encode"):
            # Resource instance
            return obj.jsonapi_encode()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            jares.log.debug("JaresJSONEncoder: serializing bytes obj")
            return obj.hex()

        # We shouldn't get here in a normal setup: the attribute should be converted
        # to a json type by the resource (eg. using an attribute func)
        jares.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        return str(obj)


class JaresJSONProvider(_JaresJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding
    """

    mimetype = "application/vnd.api+json"


class JaresJSONEncoder(_JaresJSONEncoder, json.JSONEncoder):
    """
    Common JSON encoding
    """

    pass


def encode_value(value: Any) -> Any:
    """
    :param value: attribute or meta value
    :return: value converted to json types
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return json.loads(json.dumps(value, cls=JaresJSONEncoder))
