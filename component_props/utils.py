"""Utility functions for loading design node dumps.

This module provides functions for loading node JSON from files, URLs and
raw text with proper error handling, returning a :class:`NodeIndex`.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger
from .nodes import NodeIndex

logger = get_logger(__name__)

# Header carrying a personal access token for the design tool's REST API
TOKEN_HEADER = "X-Figma-Token"


class NodeLoaderError(Exception):
    """Custom exception for node loading errors."""

    pass


def _index_from_data(data: Any, source: str) -> NodeIndex:
    index = NodeIndex.from_data(data)
    if not index.roots:
        logger.error(f"No nodes found in {source}")
        raise NodeLoaderError(f"No nodes found in {source}")
    logger.info(f"Indexed {len(index)} nodes from {source}")
    return index


def parse_nodes(text: str, source: str = "<stdin>") -> tuple[str, NodeIndex]:
    """Parse a node dump from a JSON string.

    Args:
        text: JSON text.
        source: Description used in messages.

    Returns:
        Tuple of (source description, node index).

    Raises:
        NodeLoaderError: If the text is not valid JSON or holds no nodes.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {source}: {e}")
        raise NodeLoaderError(f"Invalid JSON in {source}: {e}") from e
    return source, _index_from_data(data, source)


def load_nodes_from_file(file_path: str | Path) -> tuple[str, NodeIndex]:
    """Load a node dump from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, node index).

    Raises:
        NodeLoaderError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load nodes from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise NodeLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}", exc_info=True)
        raise NodeLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise NodeLoaderError(f"Error reading file {file_path}: {e}") from e

    source = str(file_path)
    return source, _index_from_data(data, source)


def load_nodes_from_url(
    url: str, timeout: int = 30, token: str | None = None
) -> tuple[str, NodeIndex]:
    """Load a node dump from a URL.

    Args:
        url: URL returning node JSON (a file or a REST ``nodes`` endpoint).
        timeout: Request timeout in seconds.
        token: Optional API token sent in the ``X-Figma-Token`` header.

    Returns:
        Tuple of (source description, node index).

    Raises:
        NodeLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load nodes from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise NodeLoaderError(f"Invalid URL: {url}")

    headers = {TOKEN_HEADER: token} if token else {}

    try:
        response = requests.get(url, timeout=timeout, headers=headers)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise NodeLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise NodeLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise NodeLoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise NodeLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise NodeLoaderError(f"Invalid JSON response from URL {url}: {e}") from e

    return url, _index_from_data(data, url)


def load_nodes(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
    token: str | None = None,
) -> tuple[str, NodeIndex]:
    """Load a node dump from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).
        token: API token (only used for URLs).

    Returns:
        Tuple of (source description, node index).

    Raises:
        NodeLoaderError: If neither or both parameters are provided, or loading fails.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise NodeLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise NodeLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_nodes_from_file(file_path)
    return load_nodes_from_url(url, timeout, token)
