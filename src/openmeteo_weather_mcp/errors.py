from typing import Optional


class WeatherToolError(Exception):
    """Base class for failures reported back to the MCP client as tool errors"""


class ParameterError(WeatherToolError):
    """Tool parameters rejected before any network call"""


class InvalidCoordinate(ParameterError):
    pass


class InvalidParameter(ParameterError):
    pass


class InvalidDateFormat(ParameterError):
    pass


class InvalidDateRange(ParameterError):
    pass


class NetworkError(WeatherToolError):
    """Open-Meteo could not be reached (timeout, DNS, refused connection)"""

    def __init__(self, message: str, timeout: bool = False):
        super().__init__(message)
        self.timeout = timeout


class UpstreamError(WeatherToolError):
    """Open-Meteo answered, but not with a usable response"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class FormattingError(WeatherToolError):
    """A required field is missing from a provider response"""

    def __init__(self, field: str):
        super().__init__(f"Response is missing required field '{field}'")
        self.field = field
