"""Input normalization."""

from .config_resolver import DEFAULT_PLANNER_CONFIG, resolve_planner_config
from .request import normalize_request, parse_topics

__all__ = ["DEFAULT_PLANNER_CONFIG", "normalize_request", "parse_topics", "resolve_planner_config"]
