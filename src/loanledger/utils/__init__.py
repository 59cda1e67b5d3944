"""Utility functions for loanledger."""

from loanledger.utils.date_parser import parse_date
from loanledger.utils.amount_parser import parse_amount, parse_rate
from loanledger.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "parse_rate", "resolve_account"]
