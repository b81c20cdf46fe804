"""Utility modules."""

from .parser import extract_json
from .text import coerce_list, normalize_search_text, now_iso, parse_timestamp

__all__ = ["extract_json", "coerce_list", "normalize_search_text", "now_iso", "parse_timestamp"]
