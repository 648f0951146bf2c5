"""Global configuration for ttparse.

Change these by assignment, e.g. `ttparse.settings.STRICT = True`.
"""

STRICT = False
"""Raise an exception on table directory entries that point outside
the font data instead of logging a warning."""
