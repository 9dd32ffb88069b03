"""Reusable list semantics for the entry browser and pick-list dialogs."""

from .autocomplete import AutocompleteResult, AutocompleteStyle, AutoNavigation, autocomplete, common_prefix
from .filtering import FilterableItemList, filter_items, filter_score

__all__ = [
    "AutoNavigation",
    "AutocompleteResult",
    "AutocompleteStyle",
    "FilterableItemList",
    "autocomplete",
    "common_prefix",
    "filter_items",
    "filter_score",
]
