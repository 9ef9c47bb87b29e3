from dataclasses import dataclass

from ht6.domain.auth.model.value import SeasonCode


@dataclass(frozen=True)
class Season:
    """A hackathon season and the forms attached to it."""

    season_id: str
    season_code: SeasonCode
    hacker_application_form_id: str | None = None
    rsvp_form_id: str | None = None
