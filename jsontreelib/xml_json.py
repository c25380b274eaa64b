"""XML to JSON conversion for JSONTreeLib.

Turns an XML document into a JSONObject tree that can be traversed like any
other. Parsing is done by xmltodict; the mapping follows the usual
XML-to-JSON conventions:

- the document element becomes the single member of the result;
- attributes become members of their element (no prefix);
- child elements are members named by tag, and a repeated tag turns into a
  JSONArray in document order;
- element text is stored under ``cdata_tag_name`` ("content") when the
  element has anything else, and replaces the element otherwise;
- an element with neither text, attributes nor children becomes "".

    >>> to_json_object("<book id='7'><title>T</title></book>")
    JSONObject({'book': JSONObject({'id': 7, 'title': 'T'})})
"""

import logging
import re
from typing import Any, Callable, Optional, TextIO, Tuple, Union
from xml.parsers.expat import ExpatError

import xmltodict

from .config import ORIGINAL, XMLParserConfig
from .core.container import JSONException, JSONObject, wrap

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r'-?(?:0|[1-9][0-9]*)')
_FLOAT_PATTERN = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?')

XMLSource = Union[str, bytes, TextIO]


def string_to_value(text: str) -> Any:
    """Coerce XML text into the JSON value it most likely represents.

    "true"/"false" (any case) become booleans, "null" becomes None, and
    integer or decimal literals become numbers. Anything else, including
    literals with leading zeros such as "007", stays a string.
    """
    if text == "":
        return text

    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None

    if _INT_PATTERN.fullmatch(text):
        return int(text)
    if _FLOAT_PATTERN.fullmatch(text):
        return float(text)

    return text


def _postprocessor(config: XMLParserConfig) -> Callable[[Any, str, Any], Tuple[str, Any]]:
    """Build the xmltodict hook applied to every attribute and element value."""

    def postprocess(path, key: str, value: Any) -> Tuple[str, Any]:
        # xmltodict reports an element with no content as None
        if value is None:
            return key, ""
        if isinstance(value, str) and not config.keep_strings:
            return key, string_to_value(value)
        if isinstance(value, dict) and len(value) == 1 and config.cdata_tag_name in value:
            return key, value[config.cdata_tag_name]
        return key, value

    return postprocess


def to_json_object(source: XMLSource,
                   config: Optional[XMLParserConfig] = None) -> JSONObject:
    """Convert an XML document into a JSONObject.

    Bytes are handed to the parser as they are, so an encoding declaration
    in the document is honored. Text is parsed as already decoded.

    Args:
        source: XML text, bytes, or a readable stream of either
        config: Conversion options (default: coerce values, "content" key)

    Returns:
        JSONObject with the document element as its only member, or an
        empty JSONObject for blank input

    Raises:
        JSONException: If the XML is malformed or cannot be decoded
    """
    config = config or ORIGINAL

    data = source.read() if hasattr(source, 'read') else source
    if not data or not data.strip():
        return JSONObject()

    try:
        parsed = xmltodict.parse(
            data,
            attr_prefix="",
            cdata_key=config.cdata_tag_name,
            force_list=config.force_list or None,
            postprocessor=_postprocessor(config),
        )
    except (ExpatError, UnicodeError) as e:
        raise JSONException(f"Malformed XML: {e}") from e

    result = wrap(parsed) if parsed else JSONObject()
    logger.debug(f"Converted XML document with top-level member(s) {result.keys()}")
    return result
