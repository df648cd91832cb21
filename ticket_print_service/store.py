"""
Settings Store
==============

Key/value settings that hold the printer configuration.

Two backends:
- ``FileSettingsStore``: JSON file under ``DATA_DIR`` (standalone installs)
- ``SupabaseSettingsStore``: ``system_settings`` table read through the
  PostgREST API with the service-role key
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Dict, Any

import requests

from .config import (
    DATA_DIR, PRINTER_CONFIG_KEY, SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_SETTINGS_TABLE, SUPABASE_TIMEOUT,
)
from .models import PrinterConfig, InvalidPrinterConfig

logger = logging.getLogger(__name__)


class SettingsStoreError(RuntimeError):
    """Raised when the settings backend cannot be read or written."""


class BaseSettingsStore(ABC):
    """Abstract key/value settings store."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        pass


class FileSettingsStore(BaseSettingsStore):
    """Settings kept in ``settings.json`` inside a data directory."""

    FILENAME = 'settings.json'

    def __init__(self, data_dir: str = DATA_DIR):
        self.data_dir = Path(data_dir)

    @property
    def path(self) -> Path:
        return self.data_dir / self.FILENAME

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise SettingsStoreError(f'Failed to read {self.path}: {e}') from e
        if not isinstance(data, dict):
            raise SettingsStoreError(f'{self.path} does not contain an object')
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        tmp_path = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # Written beside the target, then swapped in
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=self.data_dir,
                                             prefix='.settings-', suffix='.tmp',
                                             delete=False) as f:
                tmp_path = f.name
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise SettingsStoreError(f'Failed to write {self.path}: {e}') from e


class SupabaseSettingsStore(BaseSettingsStore):
    """Settings rows in a Supabase table (``key`` / ``value`` columns)."""

    def __init__(self, url: str, service_key: str, table: str = SUPABASE_SETTINGS_TABLE,
                 timeout: float = SUPABASE_TIMEOUT):
        self.url = url.rstrip('/')
        self.service_key = service_key
        self.table = table
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f'{self.url}/rest/v1/{self.table}'

    def _headers(self) -> Dict[str, str]:
        return {
            'apikey': self.service_key,
            'Authorization': f'Bearer {self.service_key}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

    def get(self, key: str) -> Optional[Any]:
        try:
            response = requests.get(
                self.endpoint,
                params={'key': f'eq.{key}', 'select': 'value'},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise SettingsStoreError(f'Failed to read setting {key!r}: {e}') from e

        if not rows:
            return None
        return rows[0].get('value')

    def set(self, key: str, value: Any) -> None:
        headers = self._headers()
        headers['Prefer'] = 'resolution=merge-duplicates'
        try:
            response = requests.post(
                self.endpoint,
                params={'on_conflict': 'key'},
                json=[{'key': key, 'value': value}],
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SettingsStoreError(f'Failed to write setting {key!r}: {e}') from e


def get_settings_store() -> BaseSettingsStore:
    """Supabase when credentials are configured, local file otherwise."""
    if SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY:
        return SupabaseSettingsStore(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)
    return FileSettingsStore(DATA_DIR)


def load_printer_config(store: BaseSettingsStore) -> PrinterConfig:
    """
    Read the printer configuration for one request.

    Read errors, a missing record and an invalid record all give the
    disabled default, so tickets are still issued.
    """
    try:
        value = store.get(PRINTER_CONFIG_KEY)
    except Exception as e:
        logger.warning('Failed to load printer config, printing disabled: %s', e)
        return PrinterConfig()

    try:
        return PrinterConfig.from_dict(value)
    except InvalidPrinterConfig as e:
        logger.warning('Invalid printer config, printing disabled: %s', e)
        return PrinterConfig()


def save_printer_config(store: BaseSettingsStore, printer: PrinterConfig) -> None:
    """Persist the printer configuration."""
    store.set(PRINTER_CONFIG_KEY, printer.to_dict())
