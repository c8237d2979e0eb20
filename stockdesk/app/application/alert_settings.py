from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError as ModelValidationError

from stockdesk.app.application.reactive import Signal
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.sdk.clients.alerts_client import AlertsClient
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.local_cache import ALERT_SETTINGS_KEY, LocalCache
from stockdesk.sdk.models import AlertSettings

logger = get_logger("stockdesk.alerts")


class AlertSettingsStore:
    """Remote-first alert settings with the ``alertSettings`` cache as fallback."""

    def __init__(self, client: AlertsClient, cache: LocalCache) -> None:
        self.client = client
        self.cache = cache
        self.settings: Signal[AlertSettings] = Signal(AlertSettings())

    def load(self) -> AlertSettings:
        try:
            settings = self.client.get_settings()
        except (ApiError, ValueError) as error:
            payload = ErrorMapper.to_payload(error)
            log_action(logger, "alerts", "load_settings", None, payload["trace_id"], "fallback", payload)
            cached = self._cached()
            if cached is not None:
                self.settings.set(cached)
            return self.settings.value
        self.settings.set(settings)
        log_action(logger, "alerts", "load_settings", None, None, "success")
        return settings

    def save(self, settings: AlertSettings | Mapping[str, Any]) -> AlertSettings:
        """Persist remotely. On failure the settings are still kept locally and the error is raised."""
        request = settings if isinstance(settings, AlertSettings) else AlertSettings.model_validate(settings)
        try:
            saved = self.client.update_settings(request)
        except ApiError as error:
            self._write(request)
            self.settings.set(request)
            log_action(logger, "alerts", "save_settings", None, error.trace_id, "error", ErrorMapper.to_payload(error))
            raise
        self._write(saved)
        self.settings.set(saved)
        log_action(logger, "alerts", "save_settings", None, None, "success")
        return saved

    def _cached(self) -> AlertSettings | None:
        stored = self.cache.get(ALERT_SETTINGS_KEY)
        if not isinstance(stored, dict):
            return None
        try:
            return AlertSettings.model_validate(stored)
        except ModelValidationError:
            return None

    def _write(self, settings: AlertSettings) -> None:
        self.cache.set(ALERT_SETTINGS_KEY, settings.model_dump(mode="json", by_alias=True))
