"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Any, Callable, Dict, List

from peopledir.logger import get_logger, reset_logger
from peopledir.records import Person


class ManualHandle:
    def __init__(self, scheduler: "ManualScheduler", due: int, callback: Callable[[], None]):
        self.scheduler = scheduler
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler: nothing fires until advance() moves time."""

    def __init__(self):
        self.now = 0
        self.handles: List[ManualHandle] = []

    def schedule(self, callback: Callable[[], None], delay_ms: int) -> ManualHandle:
        handle = ManualHandle(self, self.now + delay_ms, callback)
        self.handles.append(handle)
        return handle

    def advance(self, ms: int) -> None:
        self.now += ms
        due = sorted(
            (h for h in self.handles if not h.cancelled and h.due <= self.now),
            key=lambda h: h.due,
        )
        for handle in due:
            self.handles.remove(handle)
            handle.callback()

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger without file or console output for every test."""
    reset_logger()
    logger = get_logger(enable_file=False, enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def maya_and_alex() -> List[Person]:
    return [
        Person(id="A", name="Maya Patel", order=1),
        Person(id="B", name="Alex Chen", order=2),
    ]


@pytest.fixture
def neuro_people() -> List[Person]:
    return [
        Person(id="C", name="Carla Diaz", academic_rank="Neuroradiology", order=3),
        Person(id="D", name="Dev Shah", title="Neuro Imaging Lead", order=0),
        Person(id="E", name="Erin Wu", title="Body Imaging", order=1),
    ]


@pytest.fixture
def faculty_entries() -> List[Dict[str, Any]]:
    return [
        {
            "id": "f1",
            "name": "Maya Patel",
            "title": "Section Chief, Body Imaging",
            "academic_rank": "Professor",
            "clinical_focus": ["Abdominal MRI", "Liver imaging"],
            "research_interests": ["Quantitative MRI"],
            "order": 2,
            "status": "active",
            "publications_count": 80,
            "years_at_rush": 12,
        },
        {
            "id": "f2",
            "name": "Alex Chen",
            "title": "Attending Radiologist",
            "academic_rank": "Assistant Professor",
            "clinical_focus": ["Prostate MRI"],
            "order": 1,
            "status": "active",
            "publications_count": 10,
            "years_at_rush": 3,
        },
        {
            "id": "f3",
            "name": "Retired Person",
            "academic_rank": "Professor",
            "order": 0,
            "status": "inactive",
        },
        {
            "id": "f4",
            "name": "Sam Rivera",
            "academic_rank": "Associate Professor",
            "order": 3,
        },
    ]


@pytest.fixture
def faculty_document(faculty_entries) -> Dict[str, Any]:
    return {
        "divisions": {
            "body-imaging": {"name": "Body Imaging", "faculty": faculty_entries},
            "neuroradiology": {"name": "Neuroradiology", "faculty": []},
        }
    }


@pytest.fixture
def faculty_file(tmp_path, faculty_document) -> Path:
    path = tmp_path / "faculty.json"
    path.write_text(json.dumps(faculty_document, indent=2))
    return path


@pytest.fixture
def residents_file(tmp_path) -> Path:
    path = tmp_path / "residents.json"
    data = {
        "residents": [
            {"id": 1, "name": "Jordan Lee", "pgy_level": "PGY-2", "order": 1},
            {"id": 2, "name": "Priya Nair", "pgy_level": "PGY-4", "order": 0},
            {"id": 3, "name": "Chris Pgy", "pgy_level": "PGY-3", "order": 2, "status": "inactive"},
        ]
    }
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def grid_html() -> str:
    return """
    <html><body>
      <input id="facultyGridSearch" />
      <div id="facultyGrid">
        <div class="faculty-card card p-5" data-person-id="f2" data-order="1">Alex Chen</div>
        <div class="faculty-card card p-5" data-person-id="f1" data-order="2">Maya Patel</div>
        <div class="faculty-card card p-5" data-person-id="f4" data-order="3" style="color: red">Sam Rivera</div>
      </div>
    </body></html>
    """
