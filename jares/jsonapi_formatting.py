# JSON:API document formatting functions:
# - include parameter parsing (https://jsonapi.org/format/#fetching-includes)
# - top level document members (https://jsonapi.org/format/#document-top-level)
#
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from .config import get_config


def parse_include_paths(include: Optional[Union[str, Iterable[str]]]) -> List[Tuple[str, ...]]:
    """
    In order to request resources related to other resources,
    a dot-separated path for each relationship name can be specified:
        include=user.posts.tags,comments
    :param include: csv string or list of (csv) strings
    :return: list of relationship name paths, eg. [("user", "posts", "tags"), ("comments",)]

    Empty paths and empty path segments are ignored
    """
    if not include:
        return []
    if isinstance(include, str):
        include = [include]

    result = []
    for include_csv in include:
        for include_path in include_csv.split(","):
            segments = tuple(segment.strip() for segment in include_path.split(".") if segment.strip())
            if segments and segments not in result:
                result.append(segments)
    return result


def jsonapi_format_response(document: Dict[str, Any], meta: Optional[dict] = None, links: Optional[dict] = None) -> Dict[str, Any]:
    """
    Create a response dict according to the json:api schema spec
    :param document: serialized document, containing "data" and optionally "included"
    :param meta: top level meta
    :param links: top level links
    :return: jsonapi formatted dictionary
    """
    result = dict(data=document.get("data"))
    if document.get("included"):
        result["included"] = document["included"]
    if meta:
        result["meta"] = meta
    if links:
        result["links"] = links
    result["jsonapi"] = dict(version=get_config("JSONAPI_VERSION"))
    return result
