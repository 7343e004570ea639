"""
Load exchanges from JSON or YAML documents.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

import yaml

from .types import Exchange

logger = logging.getLogger(__name__)


class ExchangeLoadError(Exception):
    """Raised when an exchange document can't be read or is incomplete."""
    pass


def _field(data: Dict[str, Any], camel: str, snake: str) -> Any:
    return data[camel] if camel in data else data.get(snake)


def exchange_from_dict(data: Any) -> Exchange:
    """
    Build an Exchange from a decoded document.

    Accepts camelCase (statusCode, requestHeaders) or snake_case keys. Header
    sections may be mappings or lists of [name, value] pairs.
    """
    if not isinstance(data, dict):
        raise ExchangeLoadError("Exchange document must be a mapping")

    method = data.get("method")
    status_code = _field(data, "statusCode", "status_code")
    if not method or status_code is None:
        raise ExchangeLoadError("Exchange document requires method and statusCode")

    try:
        return Exchange.create(
            method=str(method),
            status_code=status_code,
            request_headers=_field(data, "requestHeaders", "request_headers"),
            response_headers=_field(data, "responseHeaders", "response_headers"),
            url=data.get("url"),
        )
    except (TypeError, ValueError) as e:
        raise ExchangeLoadError(f"Invalid exchange document: {e}") from e


def parse_exchange(content: str, source: str = "<string>") -> Exchange:
    """Parse a JSON or YAML exchange document."""
    try:
        # YAML is a superset of JSON, but json gives clearer errors for .json files
        if source.endswith(".json"):
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ExchangeLoadError(f"Could not parse {source}: {e}") from e
    return exchange_from_dict(data)


def load_exchange(path: Optional[str] = None, stream: Optional[TextIO] = None) -> Exchange:
    """Load an exchange from a file path, or from a stream such as stdin."""
    if path is not None and path != "-":
        logger.debug(f"Loading exchange from: {path}")
        try:
            content = Path(path).read_text()
        except OSError as e:
            raise ExchangeLoadError(f"Could not read {path}: {e}") from e
        return parse_exchange(content, source=path)

    if stream is None:
        raise ExchangeLoadError("No exchange file or input stream given")
    logger.debug("Loading exchange from input stream")
    return parse_exchange(stream.read(), source="<stdin>")
