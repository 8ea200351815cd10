"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date, parse_datetime
from ledgerbook.utils.amount_parser import parse_amount, format_amount
from ledgerbook.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_datetime", "parse_amount", "format_amount", "resolve_account"]
