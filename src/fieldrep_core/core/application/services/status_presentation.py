from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Badge:
    label: str
    color: str | None


STATUS_COLORS = {
    "approved": "green",
    "rejected": "red",
}

PRIORITY_COLORS = {
    "high": "red",
    "medium": "orange",
    "low": "green",
}


def status_badge(status: str | None) -> Badge:
    """Anything not approved or rejected is still waiting, shown in orange."""
    status = (status or "pending").strip().lower()
    return Badge(label=status.upper(), color=STATUS_COLORS.get(status, "orange"))


def priority_badge(priority: str | None) -> Badge:
    priority = (priority or "").strip()
    return Badge(label=priority, color=PRIORITY_COLORS.get(priority.lower()))
