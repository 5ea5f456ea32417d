"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
"""


class FetchError(Exception):
    """The Record Source could not supply workout records.

    Raised by repository implementations on network, authentication or
    backend failure. It is never retried locally; the analytics service
    surfaces it to the caller inside a failed AnalyticsResult.
    """

    def __init__(self, message: str, *, user_id: str = ""):
        super().__init__(message)
        self.message = message
        self.user_id = user_id


class MalformedRecordError(Exception):
    """Reserved for malformed workout data.

    Never raised: ill-shaped nested exercise/set data is normalized to a
    zero contribution by domain.converters, so a single corrupt record
    cannot fail an analytics request.
    """

    pass
