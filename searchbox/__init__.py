"""Debounced search-box query fulfillment."""
