from collections.abc import Sequence

from fieldrep_core.core.domain.entities.doctor_entry_entity import DoctorEntryEntity
from fieldrep_core.core.domain.entities.product_entity import ProductEntity


def _matches(needle: str, *haystacks: str | None) -> bool:
    return any(needle in (h or "").lower() for h in haystacks)


def filter_entries(query: str, entries: Sequence[DoctorEntryEntity]) -> list[DoctorEntryEntity]:
    """
    Case-insensitive substring match on name, speciality or type.
    Keeps the input order; a blank query returns everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(entries)
    return [e for e in entries if _matches(needle, e.name, e.speciality, e.entry_type)]


def filter_products(query: str, products: Sequence[ProductEntity]) -> list[ProductEntity]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(products)
    return [p for p in products if _matches(needle, p.name)]


class DirectoryBrowser:
    """Search box state over the already-fetched directory."""

    def __init__(self, entries: Sequence[DoctorEntryEntity] = ()) -> None:
        self._entries = list(entries)
        self.query = ""

    def set_entries(self, entries: Sequence[DoctorEntryEntity]) -> None:
        self._entries = list(entries)

    def set_query(self, query: str) -> None:
        self.query = query

    @property
    def entries(self) -> list[DoctorEntryEntity]:
        return list(self._entries)

    @property
    def visible(self) -> list[DoctorEntryEntity]:
        # no index: per-owner directories stay small
        return filter_entries(self.query, self._entries)

    @property
    def is_empty_result(self) -> bool:
        return not self.visible
