"""Custom Dishka scopes for HT6."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """HT6 dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, config)
    - UOW: One HTTP request (session, auth cache, role resolver)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
