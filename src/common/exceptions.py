class CongestionAnalyticsError(Exception):
    """Base exception for all congestion analytics errors."""
    pass

class InvalidInputError(CongestionAnalyticsError):
    """Raised when a sample or sample sequence breaks the input contract."""
    pass

class InvalidWindowError(CongestionAnalyticsError):
    """Raised when a query window is empty or reversed."""
    pass

class ConfigurationError(CongestionAnalyticsError):
    """Raised when configuration is invalid."""
    pass
