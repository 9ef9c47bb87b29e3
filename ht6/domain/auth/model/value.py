from typing import NewType

# Opaque caller identifier taken from the bearer credential.
# TODO: verify the token and derive the user id from its claims instead of using it verbatim.
CallerIdentity = NewType("CallerIdentity", str)

# Three-character hackathon season code, e.g. "S26".
SeasonCode = NewType("SeasonCode", str)

SEASON_CODE_LENGTH = 3

_BEARER_PREFIX = "Bearer "


def identity_from_authorization(header: str | None) -> CallerIdentity | None:
    """Strip the ``Bearer `` prefix from an Authorization header value.

    Returns None for a missing header, another scheme, or an empty token.
    """
    if not header or not header.startswith(_BEARER_PREFIX):
        return None
    token = header[len(_BEARER_PREFIX) :].strip()
    return CallerIdentity(token) if token else None


def season_code_or_none(value: str | None) -> SeasonCode | None:
    return SeasonCode(value) if value else None
