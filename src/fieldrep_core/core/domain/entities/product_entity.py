from dataclasses import dataclass
from decimal import Decimal

from fieldrep_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True, kw_only=True)
class ProductEntity(EntityMixin):
    id: str
    name: str
    price: Decimal
    pts: Decimal | None = None
    ptr: Decimal | None = None
