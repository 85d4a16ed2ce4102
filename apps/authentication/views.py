"""
Views for authentication module.
"""

from django.contrib import messages
from django.contrib.auth import login as auth_login, logout as auth_logout, update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from apps.core.context import SessionContext
from apps.core.utils import log_audit_action
from .forms import ChangePasswordForm, LoginForm


def safe_next_url(request):
    """The ?next= target, or None when it points off this site."""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return None


@require_http_methods(["GET", "POST"])
def login_view(request):
    # Redirect if already logged in
    if request.user.is_authenticated:
        return redirect('dashboard:home')

    if request.method == 'POST':
        form = LoginForm(request.POST, request=request)
        if form.is_valid():
            user = form.get_user()
            auth_login(request, user)

            # The context built before login was anonymous
            request.session_context = SessionContext.from_request(request)
            log_audit_action(request.session_context, 'login', 'user', user.pk,
                             f"User logged in: {user.username}")

            messages.success(request, f"Welcome back, {user.get_short_name() or user.username}!")
            return redirect(safe_next_url(request) or 'dashboard:home')
    else:
        form = LoginForm(request=request)

    context = {
        'form': form,
        'page_title': 'Login'
    }
    return render(request, 'authentication/login.html', context)


@login_required
def logout_view(request):
    username = request.user.username

    # Audit log before logout
    log_audit_action(request.session_context, 'logout', 'user', request.user.pk,
                     f"User logged out: {username}")
    auth_logout(request)

    messages.info(request, f"Goodbye, {username}! You have been logged out.")
    return redirect('authentication:login')


@login_required
def change_password_view(request):
    """Change password for logged-in users."""
    if request.method == 'POST':
        form = ChangePasswordForm(request.user, request.POST)
        if form.is_valid():
            request.user.set_password(form.cleaned_data['new_password'])
            request.user.save()
            update_session_auth_hash(request, request.user)

            log_audit_action(request.session_context, 'password_change', 'user', request.user.pk,
                             f"User changed password: {request.user.username}")

            messages.success(request, "Your password has been changed successfully!")
            return redirect('dashboard:home')
    else:
        form = ChangePasswordForm(request.user)

    context = {
        'form': form,
        'page_title': 'Change Password'
    }
    return render(request, 'authentication/change_password.html', context)
