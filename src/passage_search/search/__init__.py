"""
Search-and-replace engine over passages.

- pattern: query compilation into a single-group regex
- matcher: per-passage match counting
- highlight: escaped HTML previews with highlighted spans
- replacer: in-place substitution and replace-all statistics
"""
