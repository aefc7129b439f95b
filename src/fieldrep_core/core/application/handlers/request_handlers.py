import structlog

from fieldrep_core.core.application.commands.request_commands import CreateRequestCommand
from fieldrep_core.core.application.cqrs import CommandHandler, QueryHandler
from fieldrep_core.core.application.queries.request_queries import ListOwnerRequestsQuery, ListProductsQuery
from fieldrep_core.core.domain.entities.product_entity import ProductEntity
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord
from fieldrep_core.core.domain.events.events import RequestSubmittedEvent
from fieldrep_core.core.domain.repositories.request_repository import RequestRepository

logger = structlog.get_logger(__name__)


class CreateRequestHandler(CommandHandler[CreateRequestCommand]):
    def __init__(self, repo: RequestRepository):
        self.repo = repo

    async def handle(self, command: CreateRequestCommand) -> RequestSubmittedEvent:
        stored = await self.repo.create(command.kind, command.record)
        logger.info("request.created", kind=command.kind.value, id=stored.id, owner_id=stored.owner_id)
        return RequestSubmittedEvent(kind=command.kind, owner_id=stored.owner_id, record=stored)


class ListOwnerRequestsHandler(QueryHandler[ListOwnerRequestsQuery, list[OwnedRecord]]):
    def __init__(self, repo: RequestRepository):
        self.repo = repo

    async def handle(self, query: ListOwnerRequestsQuery) -> list[OwnedRecord]:
        return await self.repo.fetch_for_owner(query.kind, query.owner_id)


class ListProductsHandler(QueryHandler[ListProductsQuery, list[ProductEntity]]):
    def __init__(self, repo: RequestRepository):
        self.repo = repo

    async def handle(self, query: ListProductsQuery) -> list[ProductEntity]:
        return await self.repo.fetch_catalog()
