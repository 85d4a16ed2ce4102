"""
Request-scoped session context.

Built once per request from the authenticated user and handed explicitly to
services and audit logging, so no code has to reach back into the session.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    user_id: int = None
    username: str = ''
    role: str = 'read_only'
    can_edit_bills: bool = False
    can_edit_stock: bool = False
    can_authorize_nongst: bool = False
    ip_address: str = None
    user_agent: str = ''

    @classmethod
    def from_user(cls, user, ip_address=None, user_agent=''):
        if user is None or not user.is_authenticated:
            return cls(ip_address=ip_address, user_agent=user_agent)
        role = 'admin' if user.is_superuser else user.role
        return cls(
            user_id=user.pk,
            username=user.get_username(),
            role=role,
            can_edit_bills=user.can_edit_bills or role == 'admin',
            can_edit_stock=user.can_edit_stock or role == 'admin',
            can_authorize_nongst=user.can_authorize_nongst or role == 'admin',
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @classmethod
    def from_request(cls, request):
        from .utils import get_client_ip

        user_agent = request.META.get('HTTP_USER_AGENT', '')[:255]
        return cls.from_user(getattr(request, 'user', None), get_client_ip(request), user_agent)

    @property
    def is_authenticated(self):
        return self.user_id is not None

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def is_read_only(self):
        return self.role == 'read_only'

    @property
    def may_create_bills(self):
        return self.is_authenticated and not self.is_read_only

    @property
    def may_sell_non_gst(self):
        """Staff can only bill GST sales unless explicitly authorised."""
        return self.is_admin or self.can_authorize_nongst

    @property
    def may_edit_stock(self):
        return self.is_authenticated and not self.is_read_only and self.can_edit_stock
