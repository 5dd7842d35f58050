"""Holder input module."""

from .holder_loader import load_holders, parse_holder
from .registry import HolderRegistry

__all__ = ["load_holders", "parse_holder", "HolderRegistry"]
