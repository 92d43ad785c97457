"""Services layer - Application orchestration.

Available services:
- FlowDashboardService: Loads tables and builds flow views for the host
"""

from .flow_dashboard import NO_DATA_MESSAGE, FlowDashboardService

__all__ = ["FlowDashboardService", "NO_DATA_MESSAGE"]
