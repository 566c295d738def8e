from __future__ import annotations

from typing import Generator, Optional

from beatstats.services.dashboard import DashboardService

# Global/Cached instances
_dashboard_instance: Optional[DashboardService] = None


def get_dashboard_service() -> Generator[DashboardService, None, None]:
    global _dashboard_instance
    if _dashboard_instance is None:
        _dashboard_instance = DashboardService()
    yield _dashboard_instance
