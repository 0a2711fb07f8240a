# apps/core/exceptions.py

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .services import ServiceError

logger = logging.getLogger(__name__)


def marketplace_exception_handler(exc, context):
    """
    DRF exception handler.
    
    Service layer errors become {"error": ..., "details": ...} with the status
    the error class carries. Everything DRF knows about keeps its default shape.
    """
    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown'
    
    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error(f"Service error in {view_name}: {exc.message}", exc_info=exc.original_error)
        return Response(
            {'error': exc.message, 'details': exc.details},
            status=exc.status_code
        )
    
    if isinstance(exc, DjangoValidationError):
        return Response(
            {'error': '; '.join(exc.messages), 'details': {'messages': exc.messages}},
            status=status.HTTP_400_BAD_REQUEST
        )
    
    response = exception_handler(exc, context)
    if response is None:
        logger.error(f"Unhandled exception in {view_name}: {exc}", exc_info=exc)
    
    return response
