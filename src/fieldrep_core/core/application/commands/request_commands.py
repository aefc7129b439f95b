from dataclasses import dataclass

from fieldrep_core.core.application.cqrs import CommandDTO
from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord


@dataclass(frozen=True)
class CreateRequestCommand(CommandDTO):
    kind: CollectionKind
    record: OwnedRecord
