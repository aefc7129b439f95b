from dataclasses import dataclass

from fieldrep_core.core.domain.entities._base import EntityMixin
from fieldrep_core.core.domain.events.exceptions import IdentityMissingError


@dataclass(frozen=True, slots=True)
class SessionEntity(EntityMixin):
    """Signed-in representative, handed explicitly to controllers."""

    owner_id: str
    display_name: str = ""
    email: str = ""
    headquarters: str | None = None


def require_owner(session: SessionEntity | None) -> str:
    if session is None or not session.owner_id:
        raise IdentityMissingError("No authenticated owner in session")
    return session.owner_id
