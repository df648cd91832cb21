import pytest

from ticket_print_service import app as app_module
from ticket_print_service.models import PrintJob
from ticket_print_service.store import BaseSettingsStore


class MemorySettingsStore(BaseSettingsStore):
    """In-memory settings, optionally failing on read."""

    def __init__(self, values=None, error=None):
        self.values = dict(values or {})
        self.error = error

    def get(self, key):
        if self.error:
            raise self.error
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value


@pytest.fixture
def job_data():
    return {
        'ticketNumber': 'A001',
        'categoryName': 'Recepção',
        'categoryPrefix': 'A',
        'isPriority': False,
        'timestamp': '2024-01-01T10:00:00Z',
    }


@pytest.fixture
def job(job_data):
    return PrintJob.from_dict(job_data)


@pytest.fixture
def client():
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as c:
        yield c


@pytest.fixture
def use_store(monkeypatch):
    """Install a settings store for the app under test."""

    def _install(store):
        monkeypatch.setattr(app_module, 'get_settings_store', lambda: store)
        return store

    return _install


@pytest.fixture
def make_store():
    return MemorySettingsStore
