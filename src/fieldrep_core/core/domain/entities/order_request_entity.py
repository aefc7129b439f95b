from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from fieldrep_core.core.domain.entities.request_entity import RequestEntity


@dataclass(slots=True, kw_only=True)
class OrderRequestEntity(RequestEntity):
    order_type: str
    product_id: str
    quantity: int

    # --- product snapshot taken at submission --- #
    product_name: str = ""
    product_price: Decimal = Decimal("0")
    pts: Decimal | None = None
    ptr: Decimal | None = None

    # --- context --- #
    hospital_name: str = ""
    doctor_name: str = ""
    remarks: str = ""

    # --- generated --- #
    title: str = ""
    description: str = ""
    user_name: str = ""
    user_email: str = ""

    @property
    def total_amount(self) -> Decimal:
        return self.product_price * self.quantity

    def to_document(self) -> dict[str, Any]:
        data = super(OrderRequestEntity, self).to_document()
        data["totalAmount"] = self.total_amount
        return data
