from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import EmployeeType
from .strategies.base import LocationStrategy
from .strategies.onsite_strategy import OnsiteLocationStrategy
from .strategies.remote_strategy import RemoteLocationStrategy


@dataclass
class LocationStrategyFactory:
    """Factory Pattern: choose the location rule for an employee type."""

    def for_employee_type(self, employee_type: EmployeeType) -> LocationStrategy:
        if employee_type == EmployeeType.ONSITE:
            return OnsiteLocationStrategy()
        return RemoteLocationStrategy()
