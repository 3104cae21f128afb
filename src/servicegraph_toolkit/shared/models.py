"""
Core configuration models for the service graph toolkit using simple dataclasses.
"""

import logging
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError, create_error_context

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 600

_DURATION_PART = re.compile(r"(\d+)(h|m|s)")
_DURATION_UNITS = {"h": 3600, "m": 60, "s": 1}


class NodeType(str, Enum):
    """Traffic graph node types. Other values are carried through verbatim."""

    APP = "app"
    SERVICE = "service"
    WORKLOAD = "workload"
    UNKNOWN = "unknown"


class GraphType(str, Enum):
    """Graph types, identifying which node kinds a traffic graph contains."""

    APP = "app"
    VERSIONED_APP = "versionedApp"  # One app node per version
    WORKLOAD = "workload"
    SERVICE = "service"


class GroupBy(str, Enum):
    """Compound node grouping modes."""

    NONE = "none"
    APP = "app"
    VERSION = "version"


@dataclass
class GraphOptions:
    """Options controlling a single graph transformation."""

    graph_type: str = GraphType.VERSIONED_APP.value
    group_by: GroupBy = GroupBy.NONE
    query_time: int = field(default_factory=lambda: int(time.time()))  # epoch seconds
    duration: int = DEFAULT_DURATION_SECONDS  # seconds

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "GraphOptions":
        """Build options from request parameters or CLI flags.

        Both camelCase (``graphType``) and dashed (``graph-type``) keys are
        accepted. Missing values fall back to the defaults.

        Args:
            params: Mapping of option names to raw values

        Returns:
            Parsed GraphOptions

        Raises:
            ConfigurationError: If duration or query time cannot be parsed
        """

        def lookup(*keys: str) -> Any:
            for key in keys:
                value = params.get(key)
                if value is not None and value != "":
                    return value
            return None

        options = cls()

        graph_type = lookup("graphType", "graph-type", "graph_type")
        if graph_type is not None:
            if isinstance(graph_type, Enum):
                graph_type = graph_type.value
            options.graph_type = str(graph_type)

        group_by = lookup("groupBy", "group-by", "group_by")
        if group_by is not None:
            options.group_by = parse_group_by(group_by)

        query_time = lookup("queryTime", "query-time", "query_time")
        if query_time is not None:
            options.query_time = parse_query_time(query_time)

        duration = lookup("duration")
        if duration is not None:
            options.duration = parse_duration(duration)

        return options


def parse_group_by(value: Any) -> GroupBy:
    """Parse a group-by value, falling back to no grouping when unrecognized.

    Args:
        value: Raw group-by value

    Returns:
        GroupBy mode
    """
    if isinstance(value, GroupBy):
        return value
    try:
        return GroupBy(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unrecognized group-by value '{value}', grouping disabled")
        return GroupBy.NONE


def parse_query_time(value: Any) -> int:
    """Parse a query time in epoch seconds.

    Args:
        value: Integer or numeric string

    Returns:
        Epoch seconds

    Raises:
        ConfigurationError: If the value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ConfigurationError(
            "Invalid query time", create_error_context(query_time=value)
        )
    try:
        query_time = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            "Invalid query time", create_error_context(query_time=value)
        ) from e

    if query_time < 0:
        raise ConfigurationError(
            "Query time must not be negative", create_error_context(query_time=value)
        )
    return query_time


def parse_duration(value: Any) -> int:
    """Parse a duration into whole seconds.

    Accepts a number of seconds (``600``, ``"600"``) or a duration string made
    of hour/minute/second parts (``"30s"``, ``"10m"``, ``"1h30m"``).

    Args:
        value: Raw duration value

    Returns:
        Duration in seconds

    Raises:
        ConfigurationError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ConfigurationError("Invalid duration", create_error_context(duration=value))

    if isinstance(value, int | float):
        seconds = int(value)
    else:
        text = str(value).strip().lower()
        if text.isdigit():
            seconds = int(text)
        else:
            parts = _DURATION_PART.findall(text)
            if not parts or "".join(n + u for n, u in parts) != text:
                raise ConfigurationError(
                    "Invalid duration", create_error_context(duration=value)
                )
            seconds = sum(int(n) * _DURATION_UNITS[u] for n, u in parts)

    if seconds < 0:
        raise ConfigurationError(
            "Duration must not be negative", create_error_context(duration=value)
        )
    return seconds
