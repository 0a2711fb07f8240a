"""
Base service classes shared by the marketplace apps
"""

import logging
from typing import Any, Dict, List, Optional


class ServiceError(Exception):
    """Base exception for service layer errors"""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Exception for validation errors in services"""
    pass


class NotFoundError(ServiceError):
    """Exception for when requested resource is not found"""
    status_code = 404


class PermissionError(ServiceError):
    """Exception for permission-related errors"""
    status_code = 403


class BaseService:
    """Base service class for all marketplace services"""

    def __init__(self, user=None):
        self.user = user
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def log_info(self, message: str, context: Optional[Dict] = None):
        """Log informational message with context"""
        self.logger.info(message, extra={'user': str(self.user), 'context': context or {}})

    def log_warning(self, message: str, context: Optional[Dict] = None):
        """Log warning message with context"""
        self.logger.warning(message, extra={'user': str(self.user), 'context': context or {}})

    def log_error(self, message: str, error: Optional[Exception] = None, context: Optional[Dict] = None):
        """Log error message with context"""
        self.logger.error(
            message,
            extra={
                'user': str(self.user),
                'context': context or {},
                'error': str(error) if error else None
            },
            exc_info=bool(error)
        )

    def validate_required_fields(self, data: Dict, required_fields: List[str], message: Optional[str] = None) -> bool:
        """Validate that required fields are present in data"""
        missing_fields = [field for field in required_fields if not str(data.get(field) or '').strip()]
        if missing_fields:
            raise ValidationError(
                message or f"Missing required fields: {', '.join(missing_fields)}",
                details={'missing_fields': missing_fields}
            )
        return True

    def sanitize_string(self, value: Any, max_length: Optional[int] = None) -> str:
        """Sanitize string input"""
        if value is None:
            return ''
        if not isinstance(value, str):
            raise ValidationError("Value must be a string")

        sanitized = value.strip()

        if max_length and len(sanitized) > max_length:
            sanitized = sanitized[:max_length]

        return sanitized

    def validate_email(self, email: str) -> str:
        """Validate and normalize email address"""
        email = (email or '').strip().lower()
        if not email or '@' not in email:
            raise ValidationError("Invalid email address")

        if len(email) > 254:  # RFC 5321 limit
            raise ValidationError("Email address too long")

        return email

    def create_audit_log(self, action: str, resource_type: str, resource_id: Any, details: Optional[Dict] = None):
        """Write an audit line for back-office actions"""
        self.log_info(f"Audit: {action} on {resource_type} {resource_id}", {
            'action': action,
            'resource_type': resource_type,
            'resource_id': str(resource_id),
            'user_id': getattr(self.user, 'pk', None),
            'details': details
        })

