"""Core (UI-agnostic) meal attendance logic.

This package contains:
- log parsing (text -> records)
- filter dimensions and filter normalization
- statistics (day / month / person buckets)
- page compute functions (JSON-serializable payloads)
- CSV export
- chart helpers (Altair -> Vega-Lite spec dict)
"""
