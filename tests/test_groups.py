import pytest
from conftest import make_issue, make_worklog

from gpdesk_app.analytics.aggregations.groups import (
    group_hours,
    issue_summary,
    module_details,
    top_tickets_by_hours,
)
from gpdesk_app.core.models import ModuleHours


def test_group_hours_by_assignee():
    logs = [
        make_worklog("A-1", "Ana", 2.0),
        make_worklog("A-1", "Ana", 1.0),
        make_worklog("A-2", "Ana", 1.0),
        make_worklog("A-3", "Luis", 4.0),
    ]
    df = group_hours(logs, by="assignee").set_index("assignee")
    assert df.loc["Ana", "tickets"] == 2
    assert df.loc["Ana", "hours"] == 4.0
    assert df.loc["Luis", "pct_hours"] == 50.0
    assert df.loc["Ana", "avg_hours"] == 2.0


def test_group_hours_empty_and_invalid_field():
    assert group_hours([]).empty
    with pytest.raises(ValueError):
        group_hours([], by="module")


def test_issue_summary_joins_hours():
    issues = [make_issue("A-1"), make_issue("A-2")]
    logs = [make_worklog("A-1", "Ana", 2.0), make_worklog("A-1", "Ana", 0.5)]
    df = issue_summary(issues, logs).set_index("key")
    assert df.loc["A-1", "hours"] == 2.5
    assert df.loc["A-2", "hours"] == 0.0


def test_module_details_backfills_ticket_counts():
    modules = [ModuleHours("FI", 6.0, 0), ModuleHours("SD", 2.0, 4)]
    issues = [make_issue("A-1", module="FI"), make_issue("A-2", module="FI"), make_issue("A-3", module="SD")]
    df = module_details(modules, issues).set_index("module")
    assert df.loc["FI", "tickets"] == 2
    assert df.loc["FI", "avg_hours"] == 3.0
    # the view value wins when it is reported
    assert df.loc["SD", "tickets"] == 4


def test_top_tickets_by_hours():
    logs = [make_worklog("A-1", "Ana", 1.0), make_worklog("A-2", "Ana", 3.0), make_worklog("A-1", "Luis", 1.0)]
    df = top_tickets_by_hours(logs, limit=1)
    assert list(df["key"]) == ["A-2"]
