"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class DataAccessException(DomainException):
    """Database operation failed (store unreachable, malformed query, pool timeout)"""
    pass


class ConsistencyViolationException(DomainException):
    """Application found without any status events"""

    def __init__(self, application_id: int):
        self.application_id = application_id
        super().__init__(f"Application {application_id} has no status history")


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")
