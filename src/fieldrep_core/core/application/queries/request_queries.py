from dataclasses import dataclass

from fieldrep_core.core.application.cqrs import QueryDTO
from fieldrep_core.core.domain.constants import CollectionKind


@dataclass(frozen=True)
class ListOwnerRequestsQuery(QueryDTO):
    kind: CollectionKind
    owner_id: str


@dataclass(frozen=True)
class ListProductsQuery(QueryDTO):
    pass
