from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

from fieldrep_core.adapters.notifiers.base import BaseNotifier
from fieldrep_core.core.application.cqrs import CommandBus, QueryBus
from fieldrep_core.core.application.dtos.request_dtos import DoctorDraftDTO, OrderDraftDTO, UtilityDraftDTO
from fieldrep_core.core.application.queries.request_queries import ListProductsQuery
from fieldrep_core.core.application.services.form_controller import RequestFormController
from fieldrep_core.core.application.services.formatter_service import FormatterService
from fieldrep_core.core.domain.constants import CollectionKind, locations_for
from fieldrep_core.core.domain.entities.doctor_entry_entity import DoctorEntryEntity
from fieldrep_core.core.domain.entities.order_request_entity import OrderRequestEntity
from fieldrep_core.core.domain.entities.product_entity import ProductEntity
from fieldrep_core.core.domain.entities.session_entity import SessionEntity, require_owner
from fieldrep_core.core.domain.entities.utility_request_entity import UtilityRequestEntity
from fieldrep_core.core.domain.events.exceptions import IdentityMissingError, RemoteError


# ╭──────────────────────────────────────────────╮
# │ 1. Orders                                   │
# ╰──────────────────────────────────────────────╯
class OrderFormController(RequestFormController):
    kind = CollectionKind.ORDERS
    draft_model = OrderDraftDTO
    EMPTY_DRAFT = {
        "order_type": "",
        "priority": "",
        "product_id": "",
        "quantity": "",
        "hospital_name": "",
        "doctor_name": "",
        "remarks": "",
    }
    SUCCESS_MESSAGE = "Order submitted successfully for approval"
    FAILURE_MESSAGE = "Error submitting order. Please try again."

    def __init__(
        self,
        command_bus: CommandBus,
        query_bus: QueryBus,
        session: SessionEntity | None,
        notifier: BaseNotifier,
        *,
        formatter: FormatterService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(command_bus, session, notifier, clock=clock)
        self.queries = query_bus
        self.formatter = formatter or FormatterService()
        self.products: list[ProductEntity] = []
        self.loading_products = False

    async def load_products(self) -> list[ProductEntity]:
        try:
            require_owner(self.session)
        except IdentityMissingError:
            self.log.warning("products.identity_missing")
            return self.products

        self.loading_products = True
        try:
            self.products = await self.queries.dispatch(ListProductsQuery())
        except RemoteError as exc:
            self.log.error("products.fetch_failed", error=str(exc))
            self.notifier.alert("Error", "Failed to fetch products. Please try again.")
        finally:
            self.loading_products = False
        return self.products

    def _catalog(self) -> dict[str, ProductEntity]:
        return {p.id: p for p in self.products}

    def validation_context(self) -> dict[str, Any]:
        return {"products": self._catalog()}

    @property
    def selected_product(self) -> ProductEntity | None:
        return self._catalog().get(self.draft["product_id"])

    @property
    def preview_total(self) -> Decimal | None:
        """Live total under the quantity input; None until it can be computed."""
        product = self.selected_product
        raw = str(self.draft["quantity"]).strip()
        if product is None or not (raw.isascii() and raw.isdigit()) or int(raw) <= 0:
            return None
        return product.price * int(raw)

    def build_record(self, payload: OrderDraftDTO, session: SessionEntity, created_at: datetime) -> OrderRequestEntity:
        product = self._catalog()[payload.product_id]
        order = OrderRequestEntity(
            owner_id=session.owner_id,
            created_at=created_at,
            status="pending",
            priority=payload.priority,
            order_type=payload.order_type,
            product_id=product.id,
            quantity=payload.quantity,
            product_name=product.name,
            product_price=product.price,
            pts=product.pts,
            ptr=product.ptr,
            hospital_name=payload.hospital_name,
            doctor_name=payload.doctor_name,
            remarks=payload.remarks,
            user_name=session.display_name,
            user_email=session.email,
        )
        order.title = self.formatter.order_title(order)
        order.description = self.formatter.order_summary(order)
        return order


# ╭──────────────────────────────────────────────╮
# │ 2. Doctor / chemist directory               │
# ╰──────────────────────────────────────────────╯
class DoctorFormController(RequestFormController):
    kind = CollectionKind.DOCTORS
    draft_model = DoctorDraftDTO
    EMPTY_DRAFT = {
        "entry_type": "",
        "name": "",
        "speciality": "",
        "hospital": "",
        "mr_name": "",
        "phone": "",
        "email": "",
        "address": "",
        "city": "",
        "remarks": "",
        "visual_aids": [],
    }
    SUCCESS_MESSAGE = "Doctor/Chemist added successfully!"
    FAILURE_MESSAGE = "Error adding entry. Please try again."

    def _after_set(self, name: str, value: Any) -> None:
        # speciality only exists for doctors
        if name == "entry_type" and value != "Doctor":
            self.draft["speciality"] = ""

    @property
    def locations(self) -> list[str]:
        return locations_for(self.session.headquarters if self.session else None)

    @property
    def shows_speciality(self) -> bool:
        return self.draft["entry_type"] == "Doctor"

    def validation_context(self) -> dict[str, Any]:
        return {"locations": self.locations}

    def add_visual_aid(self, url: str) -> None:
        if not url or not url.strip():
            raise ValueError("visual aid url is empty")
        self.draft["visual_aids"].append(url.strip())

    def remove_visual_aid(self, index: int) -> str:
        return self.draft["visual_aids"].pop(index)

    def build_record(self, payload: DoctorDraftDTO, session: SessionEntity, created_at: datetime) -> DoctorEntryEntity:
        return DoctorEntryEntity(
            owner_id=session.owner_id,
            created_at=created_at,
            updated_at=created_at,
            name=payload.name,
            entry_type=payload.entry_type,
            speciality=payload.speciality,
            hospital=payload.hospital,
            mr_name=payload.mr_name,
            phone=payload.phone,
            email=str(payload.email) if payload.email else None,
            address=payload.address,
            city=payload.city,
            remarks=payload.remarks,
            visual_aids=list(payload.visual_aids),
        )


# ╭──────────────────────────────────────────────╮
# │ 3. Utility requests                         │
# ╰──────────────────────────────────────────────╯
class UtilityFormController(RequestFormController):
    kind = CollectionKind.UTILITIES
    draft_model = UtilityDraftDTO
    EMPTY_DRAFT = {
        "utility_type": "",
        "priority": "",
        "title": "",
        "description": "",
        "location": "",
        "remarks": "",
    }
    SUCCESS_MESSAGE = "Utility request submitted successfully"

    def build_record(self, payload: UtilityDraftDTO, session: SessionEntity, created_at: datetime) -> UtilityRequestEntity:
        return UtilityRequestEntity(
            owner_id=session.owner_id,
            created_at=created_at,
            status="pending",
            priority=payload.priority,
            utility_type=payload.utility_type,
            title=payload.title,
            description=payload.description,
            location=payload.location,
            remarks=payload.remarks,
        )
