from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import AlertSettings
from .base import BaseClient


@dataclass
class AlertsClient(BaseClient):
    def get_settings(self) -> AlertSettings:
        data = self._request("GET", "/alerts/settings", module="alerts", operation="get_settings")
        if not isinstance(data, dict):
            raise ValueError("Expected alert settings response to be a JSON object")
        return AlertSettings.model_validate(data)

    def update_settings(self, settings: AlertSettings | Mapping[str, Any]) -> AlertSettings:
        request = settings if isinstance(settings, AlertSettings) else AlertSettings.model_validate(settings)
        data = self._request(
            "PUT",
            "/alerts/settings",
            json_body=request.model_dump(mode="json", by_alias=True),
            module="alerts",
            operation="update_settings",
        )
        return AlertSettings.model_validate(data) if isinstance(data, dict) and data else request
