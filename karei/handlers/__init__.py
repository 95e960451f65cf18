"""
Domain handlers — the side effects behind each option.

Every handler has the signature ``(ctx: RunContext, target: str) -> None``
and raises on failure. They are wired to options in
``karei.core.patterns.factories``.
"""
