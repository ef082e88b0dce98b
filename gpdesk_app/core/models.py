"""Canonical records for projects, issues, worklogs and monthly aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class ProjectModel:
    id: str
    name: str
    tracker_id: str | None
    contracted_hours: float | None = None
    status: str | None = None
    description: str | None = None


@dataclass(slots=True)
class IssueModel:
    key: str
    summary: str
    status: str
    priority: str
    issue_type: str
    assignee: str
    created: datetime | None
    module: str


@dataclass(slots=True)
class WorklogModel:
    key: str
    assignee: str
    hours: float
    created: datetime | None = None
    comment: str | None = None


@dataclass(slots=True)
class StatusCount:
    status: str
    count: int


@dataclass(slots=True)
class PriorityCount:
    priority: str
    count: int
    pct: float = 0.0


@dataclass(slots=True)
class TypeCount:
    issue_type: str
    count: int


@dataclass(slots=True)
class ModuleHours:
    module: str
    hours: float
    tickets: int = 0


@dataclass(slots=True)
class ConsultantHours:
    name: str
    tickets: int
    hours: float
    pct_tickets: float = 0.0
    pct_hours: float = 0.0


@dataclass(slots=True)
class TopTicket:
    key: str
    hours: float


@dataclass(slots=True)
class MonthData:
    """Everything fetched for one project and month, already normalized."""

    project: ProjectModel | None = None
    month: str | None = None
    total_tickets: int = 0
    total_hours: float = 0.0
    statuses: list[StatusCount] = field(default_factory=list)
    priorities: list[PriorityCount] = field(default_factory=list)
    types: list[TypeCount] = field(default_factory=list)
    modules: list[ModuleHours] = field(default_factory=list)
    consultants: list[ConsultantHours] = field(default_factory=list)
    worklogs: list[WorklogModel] = field(default_factory=list)
    calendar_issues: list[IssueModel] = field(default_factory=list)
    top_tickets: list[TopTicket] = field(default_factory=list)
    issues: list[IssueModel] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.total_tickets
            or self.total_hours
            or self.statuses
            or self.worklogs
            or self.consultants
            or self.modules
        )
