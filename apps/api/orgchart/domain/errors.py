from __future__ import annotations

"""Error kinds raised by the state store and its backends."""


class OrgChartError(Exception):
    """Base class for org chart service errors."""


class InvalidInput(OrgChartError):
    """The replace payload is missing `employees` or it is not a list."""


class NotFound(OrgChartError):
    """No employee with the requested id exists in the current state."""


class BackendError(OrgChartError):
    """The persistence backend failed to read or write the state record."""
