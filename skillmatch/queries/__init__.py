"""
Query layer.

One function per access pattern, each a single round trip taking the
session it runs on. Lookups return ``None`` when no row matches; store
errors (unique violations, connection failures) propagate to the caller.
Nothing here commits: the caller's transaction scope does.
"""
