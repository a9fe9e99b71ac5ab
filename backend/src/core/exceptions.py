"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthorizationException(DomainException):
    """Caller not allowed to perform this operation on the resource"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RepositoryException(DomainException):
    """Document store operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(DomainException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value: str):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")


class InvalidTransitionException(DomainException):
    """Status change not allowed from the current state"""

    def __init__(self, resource_type: str, current: str, requested: str):
        self.resource_type = resource_type
        self.current = current
        self.requested = requested
        super().__init__(
            f"{resource_type} cannot move from '{current}' to '{requested}'"
        )


class PreconditionFailedException(DomainException):
    """Conditional write rejected because the stored document changed"""

    def __init__(self, resource_type: str, identifier: str, field: str):
        self.resource_type = resource_type
        self.identifier = identifier
        self.field = field
        super().__init__(
            f"{resource_type} {identifier}: '{field}' no longer has the expected value"
        )
