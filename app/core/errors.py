class AvailabilityError(Exception):
    """Base error for the availability endpoints. Routes map status_code onto the HTTP response."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(AvailabilityError):
    status_code = 400


class NotFoundError(AvailabilityError):
    status_code = 404


class InvalidServiceDurationError(AvailabilityError):
    """Bad upstream data, not bad caller input."""

    status_code = 500


class ConflictLookupError(AvailabilityError):
    """Appointments or group activities could not be read for a professional/day."""

    status_code = 500
