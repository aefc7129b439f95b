from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from fieldrep_core.core.domain.constants import DOCTOR_TYPES, ORDER_TYPES, PRIORITY_TYPES, SPECIALITIES, UTILITY_TYPES


def _required(value: str, label: str) -> str:
    if not value:
        raise PydanticCustomError("required", "{label} is required", {"label": label})
    return value


def _choice(value: str, options: list[str], label: str) -> str:
    _required(value, label)
    if value not in options:
        raise PydanticCustomError("choice", "Select a valid {label}", {"label": label.lower()})
    return value


def errors_by_field(exc: ValidationError) -> dict[str, str]:
    """First message per draft field, ready to render under the input."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__all__"
        errors.setdefault(field, err["msg"])
    return errors


class DraftDTO(BaseModel):
    """Defaults are validated too, so an untouched required field reports itself."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_default=True, extra="ignore")


# ───────────────────────────────────────────────
# Orders
# ───────────────────────────────────────────────
class OrderDraftDTO(DraftDTO):
    order_type: str = ""
    priority: str = ""
    product_id: str = ""
    quantity: int = 0
    hospital_name: str = ""
    doctor_name: str = ""
    remarks: str = ""

    @field_validator("order_type")
    @classmethod
    def _order_type(cls, v: str) -> str:
        return _choice(v, ORDER_TYPES, "Type")

    @field_validator("priority")
    @classmethod
    def _priority(cls, v: str) -> str:
        return _choice(v, PRIORITY_TYPES, "Priority")

    @field_validator("product_id")
    @classmethod
    def _product(cls, v: str, info: ValidationInfo) -> str:
        _required(v, "Product")
        catalog = (info.context or {}).get("products")
        if catalog is not None and v not in catalog:
            raise PydanticCustomError("not_found", "Selected product not found")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise PydanticCustomError("required", "Quantity is required")
            if not (v.isascii() and v.isdigit()):
                raise PydanticCustomError("quantity", "Please enter a valid quantity")
            v = int(v)
        elif isinstance(v, float) and v.is_integer():
            v = int(v)
        elif isinstance(v, bool) or not isinstance(v, int):
            raise PydanticCustomError("quantity", "Please enter a valid quantity")
        if v <= 0:
            raise PydanticCustomError("quantity", "Please enter a valid quantity")
        return v


# ───────────────────────────────────────────────
# Doctor / chemist directory
# ───────────────────────────────────────────────
class DoctorDraftDTO(DraftDTO):
    # entry_type is declared first: the speciality rule reads it
    entry_type: str = ""
    name: str = ""
    speciality: str = ""
    hospital: str = ""
    mr_name: str = ""
    phone: str = ""
    email: EmailStr | None = None
    address: str = ""
    city: str = ""
    remarks: str = ""
    visual_aids: list[str] = []

    @field_validator("entry_type")
    @classmethod
    def _entry_type(cls, v: str) -> str:
        return _choice(v, DOCTOR_TYPES, "Type")

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _required(v, "Name")

    @field_validator("mr_name")
    @classmethod
    def _mr_name(cls, v: str) -> str:
        return _required(v, "MR Name")

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return _required(v, "Phone Number")

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        return _required(v, "Address")

    @field_validator("speciality")
    @classmethod
    def _speciality(cls, v: str, info: ValidationInfo) -> str:
        entry_type = info.data.get("entry_type")
        if entry_type is None:
            # type itself is invalid and already reported
            return v
        if entry_type == "Doctor":
            if not v:
                raise PydanticCustomError("required", "Speciality is required for doctors")
            return _choice(v, SPECIALITIES, "Speciality")
        if v:
            raise PydanticCustomError("not_applicable", "Speciality only applies to doctors")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("city")
    @classmethod
    def _city(cls, v: str, info: ValidationInfo) -> str:
        _required(v, "Location")
        locations = (info.context or {}).get("locations")
        if locations is not None and v not in locations:
            raise PydanticCustomError("choice", "Select a location from the list")
        return v


# ───────────────────────────────────────────────
# Utility requests
# ───────────────────────────────────────────────
class UtilityDraftDTO(DraftDTO):
    utility_type: str = ""
    priority: str = ""
    title: str = ""
    description: str = ""
    location: str = ""
    remarks: str = ""

    @field_validator("utility_type")
    @classmethod
    def _utility_type(cls, v: str) -> str:
        return _choice(v, UTILITY_TYPES, "Type")

    @field_validator("priority")
    @classmethod
    def _priority(cls, v: str) -> str:
        if v and v not in PRIORITY_TYPES:
            raise PydanticCustomError("choice", "Select a valid priority")
        return v

    @field_validator("location")
    @classmethod
    def _location(cls, v: str) -> str:
        return _required(v, "Location")
