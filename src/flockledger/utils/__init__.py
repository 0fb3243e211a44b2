"""Utility functions for flockledger."""

from flockledger.utils.date_parser import parse_date
from flockledger.utils.amount_parser import parse_amount, parse_count
from flockledger.utils.resolver import resolve_reference

__all__ = ["parse_date", "parse_amount", "parse_count", "resolve_reference"]
