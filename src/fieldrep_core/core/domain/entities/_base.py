from dataclasses import asdict, fields
from functools import cache
from typing import Any, ClassVar, TypeVar

from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel, to_snake

T = TypeVar("T")


@cache
def _adapter(cls: type) -> TypeAdapter:
    return TypeAdapter(cls)


class EntityMixin:
    # attribute -> document key, for keys that don't follow camelCase
    DOCUMENT_KEYS: ClassVar[dict[str, str]] = {}

    def to_dict(self) -> dict[str, Any]:
        """
        Converts the entity to a dict, recursively for nested dataclasses.
        """
        return asdict(self)

    @classmethod
    def from_document(cls: type[T], doc_id: str, data: dict[str, Any]) -> T:
        """
        Builds the entity from a store document (camelCase keys).

        Unknown keys are dropped; values are coerced by pydantic, so ISO
        timestamps and numeric strings coming from the wire are accepted.
        """
        reverse = {v: k for k, v in cls.DOCUMENT_KEYS.items()}
        known = {f.name for f in fields(cls)}
        payload: dict[str, Any] = {}
        for key, value in data.items():
            name = reverse.get(key, to_snake(key))
            if name in known:
                payload[name] = value
        payload["id"] = doc_id
        return _adapter(cls).validate_python(payload)

    def to_document(self) -> dict[str, Any]:
        """
        Flat field mapping sent to the store. The id is assigned by the
        store and never written inside the document.
        """
        data = self.to_dict()
        data.pop("id", None)
        return {self.DOCUMENT_KEYS.get(k, to_camel(k)): v for k, v in data.items()}
