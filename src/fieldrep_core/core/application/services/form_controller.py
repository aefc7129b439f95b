from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any, ClassVar

import structlog
from pydantic import ValidationError

from fieldrep_core.adapters.notifiers.base import BaseNotifier
from fieldrep_core.adapters.observability.metrics import REQUESTS_SUBMITTED
from fieldrep_core.core.application.commands.request_commands import CreateRequestCommand
from fieldrep_core.core.application.cqrs import CommandBus
from fieldrep_core.core.application.dtos.request_dtos import DraftDTO, errors_by_field
from fieldrep_core.core.application.services.type_selector import AnchorBounds, AnchoredTypeSelector
from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord
from fieldrep_core.core.domain.entities.session_entity import SessionEntity, require_owner
from fieldrep_core.core.domain.events.exceptions import FormValidationError, IdentityMissingError, RemoteError

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestFormController(ABC):
    """
    Draft state of one form screen.

    - `set_field()` and `validate()` only touch the in-memory draft.
    - `submit()` is the only path to the store: validate, derive fields,
      dispatch `CreateRequestCommand`, then clear the draft on success.
    - A RemoteError keeps the draft so the user can simply submit again.
    """

    kind: ClassVar[CollectionKind]
    draft_model: ClassVar[type[DraftDTO]]
    EMPTY_DRAFT: ClassVar[dict[str, Any]]
    SUCCESS_MESSAGE: ClassVar[str] = "Request submitted successfully"
    FAILURE_MESSAGE: ClassVar[str] = "Error submitting request. Please try again."

    def __init__(
        self,
        command_bus: CommandBus,
        session: SessionEntity | None,
        notifier: BaseNotifier,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.commands = command_bus
        self.session = session
        self.notifier = notifier
        self.clock = clock or utcnow
        self.draft: dict[str, Any] = copy.deepcopy(self.EMPTY_DRAFT)
        self.errors: dict[str, str] = {}
        self.submitting = False
        self.log = logger.bind(form=self.kind.value)

    # ------------------------------------------------ draft
    def set_field(self, name: str, value: Any) -> None:
        if name not in self.draft:
            raise KeyError(f"Unknown field for {self.kind.value} form: {name}")
        self.draft[name] = value
        self._after_set(name, value)

    def _after_set(self, name: str, value: Any) -> None:
        """Hook for fields that reset others."""

    def reset(self) -> None:
        self.draft = copy.deepcopy(self.EMPTY_DRAFT)
        self.errors = {}

    def cancel(self) -> None:
        self.log.debug("form.cancelled")
        self.reset()

    def selector_for(
        self,
        field: str,
        options: Sequence[str],
        measure: Callable[[], AnchorBounds | None],
        *,
        label: str = "Select Type",
    ) -> AnchoredTypeSelector:
        if field not in self.draft:
            raise KeyError(f"Unknown field for {self.kind.value} form: {field}")
        return AnchoredTypeSelector(
            options,
            lambda value: self.set_field(field, value),
            measure,
            label=label,
            current=lambda: self.draft[field] or None,
        )

    # ------------------------------------------------ validation
    def validation_context(self) -> dict[str, Any]:
        return {}

    def _validated(self) -> DraftDTO:
        try:
            return self.draft_model.model_validate(self.draft, context=self.validation_context())
        except ValidationError as exc:
            raise FormValidationError(errors_by_field(exc)) from exc

    def validate(self) -> dict[str, str]:
        """Field name -> message; empty when the draft can be submitted."""
        try:
            self._validated()
        except FormValidationError as exc:
            self.errors = exc.errors
        else:
            self.errors = {}
        return dict(self.errors)

    # ------------------------------------------------ submission
    @abstractmethod
    def build_record(self, payload: Any, session: SessionEntity, created_at: datetime) -> OwnedRecord:
        """Turns a validated draft into the record to store, derived fields included."""
        ...

    async def submit(self) -> OwnedRecord | None:
        if self.submitting:
            self.log.info("form.submit_ignored", reason="in_flight")
            return None

        try:
            payload = self._validated()
        except FormValidationError as exc:
            self.errors = exc.errors
            REQUESTS_SUBMITTED.labels(self.kind.value, "invalid").inc()
            self.log.info("form.invalid", fields=sorted(exc.errors))
            return None
        self.errors = {}

        try:
            owner_id = require_owner(self.session)
        except IdentityMissingError:
            self.log.warning("form.identity_missing")
            return None

        record = self.build_record(payload, self.session, self.clock())
        self.submitting = True
        try:
            event = await self.commands.dispatch(CreateRequestCommand(kind=self.kind, record=record))
        except RemoteError as exc:
            REQUESTS_SUBMITTED.labels(self.kind.value, "remote_error").inc()
            self.log.error("form.submit_failed", owner_id=owner_id, error=str(exc))
            self.notifier.alert("Error", self.FAILURE_MESSAGE)
            return None
        finally:
            self.submitting = False

        REQUESTS_SUBMITTED.labels(self.kind.value, "stored").inc()
        self.log.info("form.submitted", owner_id=owner_id, id=event.record.id)
        self.reset()
        self.notifier.alert("Success", self.SUCCESS_MESSAGE)
        return event.record
