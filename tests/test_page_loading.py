import pytest

from gpdesk_app.core.models import MonthData, ProjectModel
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.pages import _common


class RecordingReporter:
    instances = []

    def __init__(self, title):
        self.title = title
        self.events = []
        RecordingReporter.instances.append(self)

    def callback(self, message, current=None, total=None):
        self.events.append(("progress", message))

    def complete(self, message):
        self.events.append(("complete", message))

    def error(self, message):
        self.events.append(("error", message))

    def discard(self):
        self.events.append(("discard", None))


class StubService:
    def __init__(self, fail=False):
        self.fail = fail

    def get_project(self, project_id):
        return ProjectModel(id=project_id, name="Acme Retail", tracker_id="ACME")

    def fetch_month(self, project, month, *, progress=None):
        if self.fail:
            raise RuntimeError("connection reset")
        return MonthData(project=project, month=month, total_tickets=1)


@pytest.fixture(autouse=True)
def recording_reporter(monkeypatch):
    RecordingReporter.instances = []
    monkeypatch.setattr(_common, "ProgressReporter", RecordingReporter)
    return RecordingReporter


def _session(service):
    session = DashboardSession(service=service)
    session.select_project("7")
    session.select_month("2026-08")
    return session


def test_failed_batch_is_reported_on_the_banner(recording_reporter):
    session = _session(StubService(fail=True))
    with pytest.raises(RuntimeError, match="connection reset"):
        _common.load_month_data(session)
    (reporter,) = recording_reporter.instances
    assert reporter.events[-1][0] == "error"
    assert "connection reset" in reporter.events[-1][1]
    assert session.month_data is None


def test_loaded_batch_is_stored_once(recording_reporter):
    session = _session(StubService())
    data = _common.load_month_data(session)
    assert data.month == "2026-08"
    assert _common.load_month_data(session) is data
    assert len(recording_reporter.instances) == 1
    assert recording_reporter.instances[0].events[-1][0] == "complete"
