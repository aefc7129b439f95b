import structlog
from dependency_injector import containers, providers

container = None


def setup_di_container_from_settings(settings, *, configure_logs: bool = True):
    """Builds the DI container once, registers every handler on the buses and returns it."""
    global container  # noqa: PLW0603
    if container is not None:
        structlog.get_logger().debug("DI container already initialised.")
        return container

    from fieldrep_core.adapters.api_clients.image_client import ImageClient
    from fieldrep_core.adapters.config.structlog_config import configure_logging
    from fieldrep_core.adapters.document_store.http_store import HttpDocumentStore
    from fieldrep_core.adapters.document_store.memory_store import InMemoryDocumentStore
    from fieldrep_core.adapters.notifiers.base import LogNotifier
    from fieldrep_core.adapters.repositories.request_repo_impl import RequestRepoImpl

    # Commands / queries
    from fieldrep_core.core.application.commands.request_commands import CreateRequestCommand

    # CQRS buses
    from fieldrep_core.core.application.cqrs import CommandBusImpl, QueryBusImpl
    from fieldrep_core.core.application.handlers.request_handlers import (
        CreateRequestHandler,
        ListOwnerRequestsHandler,
        ListProductsHandler,
    )
    from fieldrep_core.core.application.queries.request_queries import ListOwnerRequestsQuery, ListProductsQuery

    # Services
    from fieldrep_core.core.application.services.formatter_service import FormatterService
    from fieldrep_core.core.application.services.request_forms import (
        DoctorFormController,
        OrderFormController,
        UtilityFormController,
    )
    from fieldrep_core.core.application.services.request_list_service import RequestListService
    from fieldrep_core.core.application.services.visual_aid_gallery import VisualAidGallery
    from fieldrep_core.core.domain.constants import CollectionKind
    from fieldrep_core.core.domain.services.event_dispatcher import EventDispatcher

    if configure_logs:
        configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)

    # ─────────────────────────────────────────────────────────
    # DI container
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        event_dispatcher = providers.Singleton(EventDispatcher)
        notifier         = providers.Singleton(LogNotifier)

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # Store
        document_store = providers.Selector(
            config.store.backend,
            memory=providers.Singleton(InMemoryDocumentStore),
            http=providers.Singleton(
                HttpDocumentStore,
                base_url=config.store.base_url,
                api_key=config.store.api_key,
                timeout=config.store.timeout,
            ),
        )
        request_repo = providers.Singleton(
            RequestRepoImpl,
            store=document_store,
            collections=providers.Dict({
                CollectionKind.ORDERS: config.collections.orders,
                CollectionKind.DOCTORS: config.collections.doctors,
                CollectionKind.UTILITIES: config.collections.utilities,
                CollectionKind.PRODUCTS: config.collections.products,
            }),
        )
        image_client = providers.Singleton(ImageClient, timeout=config.gallery.image_timeout)

        # Handlers
        create_request_handler      = providers.Factory(CreateRequestHandler,     repo=request_repo)
        list_owner_requests_handler = providers.Factory(ListOwnerRequestsHandler, repo=request_repo)
        list_products_handler       = providers.Factory(ListProductsHandler,      repo=request_repo)

        # Screens (session is supplied by the caller)
        formatter_service = providers.Singleton(FormatterService, currency_symbol=config.currency_symbol)
        order_form = providers.Factory(
            OrderFormController,
            command_bus=command_bus,
            query_bus=query_bus,
            notifier=notifier,
            formatter=formatter_service,
        )
        doctor_form  = providers.Factory(DoctorFormController,  command_bus=command_bus, notifier=notifier)
        utility_form = providers.Factory(UtilityFormController, command_bus=command_bus, notifier=notifier)
        request_list = providers.Factory(RequestListService, query_bus=query_bus, notifier=notifier)
        visual_aid_gallery = providers.Factory(
            VisualAidGallery,
            image_loader=image_client,
            swipe_threshold=config.gallery.swipe_threshold,
            max_quality=config.gallery.max_quality,
        )

        def init(self):
            cmd_bus = self.command_bus()
            cmd_bus.register(CreateRequestCommand, self.create_request_handler())

            qry_bus = self.query_bus()
            qry_bus.register(ListOwnerRequestsQuery, self.list_owner_requests_handler())
            qry_bus.register(ListProductsQuery, self.list_products_handler())

    # ------- INSTANTIATION AND CONFIG -------
    container = Container()
    container.config.store.backend.from_value(settings.STORE_BACKEND)
    container.config.store.base_url.from_value(settings.STORE_BASE_URL)
    container.config.store.api_key.from_value(settings.STORE_API_KEY)
    container.config.store.timeout.from_value(settings.STORE_TIMEOUT)
    container.config.collections.orders.from_value(settings.ORDERS_COLLECTION)
    container.config.collections.doctors.from_value(settings.DOCTORS_COLLECTION)
    container.config.collections.utilities.from_value(settings.UTILITIES_COLLECTION)
    container.config.collections.products.from_value(settings.PRODUCTS_COLLECTION)
    container.config.gallery.image_timeout.from_value(settings.IMAGE_TIMEOUT)
    container.config.gallery.swipe_threshold.from_value(settings.GALLERY_SWIPE_THRESHOLD)
    container.config.gallery.max_quality.from_value(settings.IMAGE_MAX_QUALITY)
    container.config.currency_symbol.from_value(settings.CURRENCY_SYMBOL)
    Container.init(container)
    return container
