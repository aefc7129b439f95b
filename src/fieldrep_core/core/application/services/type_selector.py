from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AnchorBounds:
    """On-screen position and size of the button the menu hangs from."""
    x: float
    y: float
    width: float
    height: float


class TypeSelector(Protocol):
    def open(self, anchor_bounds: AnchorBounds) -> None:
        """Shows the menu at `anchor_bounds`; the position is fixed until closed."""
        ...

    def select(self, value: str) -> None:
        """Hands `value` to the form and closes."""
        ...

    def dismiss(self) -> None:
        """Closes without selecting."""
        ...


class AnchoredTypeSelector:
    """
    Single-choice menu anchored to a button.

    Opening is a two-step protocol: `measure()` the anchor, then `open(bounds)`.
    The anchor is measured again on every open because the layout may have
    moved since the previous one.
    """

    def __init__(
        self,
        options: Sequence[str],
        on_select: Callable[[str], None],
        measure: Callable[[], AnchorBounds | None],
        *,
        label: str = "Select Type",
        selected: str | None = None,
        current: Callable[[], str | None] | None = None,
    ) -> None:
        self.options = list(options)
        self.on_select = on_select
        self.measure = measure
        self.label = label
        self.selected = selected
        # when given, the owner of the value is asked instead of `selected`
        self.current = current
        self.visible = False
        self.bounds: AnchorBounds | None = None

    @property
    def button_label(self) -> str:
        value = self.current() if self.current is not None else self.selected
        return value or self.label

    def request_open(self) -> bool:
        bounds = self.measure()
        if bounds is None:
            logger.debug("selector.anchor_not_measured", label=self.label)
            return False
        self.open(bounds)
        return True

    def open(self, anchor_bounds: AnchorBounds) -> None:
        if not isinstance(anchor_bounds, AnchorBounds):
            raise TypeError("open() needs the measured anchor bounds")
        self.bounds = anchor_bounds
        self.visible = True

    def select(self, value: str) -> None:
        if not self.visible:
            raise RuntimeError("selector is not open")
        if value not in self.options:
            raise ValueError(f"{value!r} is not one of {self.options}")
        self.on_select(value)
        self.selected = value
        self.dismiss()

    def dismiss(self) -> None:
        self.visible = False
