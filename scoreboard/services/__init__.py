"""Service layer helpers."""

from .scores import entries_to_list, entry_to_dict, outcome_to_dict, stats_to_dict

__all__ = [
    "entries_to_list",
    "entry_to_dict",
    "outcome_to_dict",
    "stats_to_dict",
]
