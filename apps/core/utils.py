"""
Utility functions for the Swarna application.
Helper functions used across multiple modules.
"""

import logging

from django.db import DatabaseError

from .models import AuditLog

logger = logging.getLogger(__name__)


def log_audit_action(context, action, entity_type='', entity_id=None, details=''):
    """
    Create an audit log entry.

    Args:
        context: SessionContext of the acting user
        action: Type of action (e.g., 'create', 'update', 'delete', 'login')
        entity_type: Type of object affected (e.g., 'bill', 'customer')
        entity_id: ID of the affected object
        details: Description of the action

    Returns:
        AuditLog object or None if creation failed
    """
    try:
        return AuditLog.objects.create(
            user_id=context.user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else '',
            details=details,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )
    except DatabaseError as e:
        # Audit failures never fail the request
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def get_client_ip(request):
    """
    Get the client's IP address from the request.

    Args:
        request: HTTP request object

    Returns:
        String IP address or None
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def get_status_badge_class(status):
    """
    Get Bootstrap badge class for bill, booking and stock statuses.

    Args:
        status: Status string

    Returns:
        String Bootstrap class name
    """
    status_map = {
        'draft': 'bg-secondary',
        'pending': 'bg-warning text-dark',
        'finalized': 'bg-success',
        'cancelled': 'bg-danger',
        'active': 'bg-primary',
        'delivered': 'bg-info text-dark',
        'completed': 'bg-success',
        'in_stock': 'bg-success',
        'reserved': 'bg-warning text-dark',
        'sold': 'bg-secondary',
        'returned': 'bg-info text-dark',
    }
    return status_map.get((status or '').lower(), 'bg-secondary')
