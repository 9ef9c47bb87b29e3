"""Per-request memo of role check results."""

from ht6.domain.auth.model.role import Role


class RequestAuthCache:
    """Role -> bool store owned by exactly one in-flight request.

    One instance per request (dishka UOW scope). Writes are write-once per role:
    the first resolution stored for a role wins and later writes are ignored.
    """

    __slots__ = ("_results",)

    def __init__(self) -> None:
        self._results: dict[Role, bool] = {}

    def get(self, role: Role) -> bool | None:
        return self._results.get(role)

    def set(self, role: Role, value: bool) -> bool:
        """Store ``value`` unless the role is already cached. Returns the stored value."""
        return self._results.setdefault(role, value)

    def __contains__(self, role: object) -> bool:
        return role in self._results

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"RequestAuthCache({self._results!r})"
