from __future__ import annotations

from dataclasses import dataclass

from ..models import DashboardStats
from .base import BaseClient, range_params


@dataclass
class DashboardClient(BaseClient):
    def stats(self, start_date: str | None = None, end_date: str | None = None) -> DashboardStats:
        data = self._request(
            "GET", "/dashboard/stats", params=range_params(start_date, end_date), module="dashboard", operation="stats"
        )
        if not isinstance(data, dict):
            raise ValueError("Expected dashboard stats response to be a JSON object")
        return DashboardStats.model_validate(data)
