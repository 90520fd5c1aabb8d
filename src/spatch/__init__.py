"""spatch — split unified diffs into one patch per file."""

__version__ = "0.3.0"
