class HubError(ValueError):
    """Base class for rule violations raised by the service layer."""

    status_code = 400


class PermissionDenied(HubError):
    status_code = 403


class NotFound(HubError):
    status_code = 404


class JobExecutionError(HubError):
    """A simulated extraction run failed; the execution row is already marked failed."""
