"""AI completion integration layer.

This package is intentionally small:
- One stateless client per call site, configured from settings.
- Prompts and generated answers are never logged.
- Malformed upstream output degrades to an empty answer instead of an error.
"""
