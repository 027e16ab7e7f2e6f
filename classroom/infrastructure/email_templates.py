"""HTML and plain-text bodies for outgoing emails."""

from __future__ import annotations

from html import escape

from classroom.config import get_settings

_LAYOUT = (
    "<!DOCTYPE html>"
    "<html><head><meta charset=\"UTF-8\">"
    "<meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\"></head>"
    "<body style=\"font-family: Arial, sans-serif; line-height: 1.6; color: #333; "
    "background-color: #f5f5f5; margin: 0; padding: 0;\">"
    "<div style=\"max-width: 600px; margin: 0 auto; background-color: #ffffff;\">"
    "<div style=\"background: {accent}; color: #ffffff; padding: 30px 20px; text-align: center;\">"
    "<h1 style=\"margin: 0;\">{platform}</h1></div>"
    "<div style=\"padding: 40px 30px;\">{body}</div>"
    "<div style=\"background: #f8fafc; text-align: center; padding: 25px 20px; "
    "color: #64748b; font-size: 13px;\">"
    "<p>{footer}</p>"
    "<p>This is an automated message. Please do not reply.</p>"
    "</div></div></body></html>"
)

_NOTIFICATION_ACCENT = "#2563eb"
_ACCOUNT_ACCENT = "#059669"


def _wrap(body: str, *, accent: str, footer: str) -> str:
    platform = escape(get_settings().platform_name)
    return _LAYOUT.format(accent=accent, platform=platform, body=body, footer=escape(footer))


def render_notification_email(title: str, content: str) -> tuple[str, str, str]:
    """Return ``(subject, html, text)`` for a notification."""

    body = (
        f"<h2>{escape(title)}</h2>"
        f"<div style=\"white-space: pre-wrap;\">{escape(content)}</div>"
    )
    html = _wrap(body, accent=_NOTIFICATION_ACCENT, footer="You are receiving this because "
                 "email notifications are enabled on your account.")
    text = f"{title}\n\n{content}\n\nBest regards,\nThe {get_settings().platform_name} Team\n"
    return title, html, text


def render_welcome_email(*, name: str, email: str, password: str) -> tuple[str, str, str]:
    """Return ``(subject, html, text)`` for a newly provisioned account."""

    platform = get_settings().platform_name
    subject = f"Welcome to {platform} - Account Created"
    body = (
        f"<p>Hello {escape(name)},</p>"
        f"<p>An account has been created for you on {escape(platform)}.</p>"
        f"<p><strong>Email:</strong> {escape(email)}<br>"
        f"<strong>Temporary password:</strong> {escape(password)}</p>"
        "<p>Please sign in and change your password as soon as possible.</p>"
    )
    html = _wrap(body, accent=_ACCOUNT_ACCENT, footer=platform)
    text = (
        f"Hello {name},\n\n"
        f"An account has been created for you on {platform}.\n"
        f"Email: {email}\nTemporary password: {password}\n\n"
        "Please sign in and change your password as soon as possible.\n"
    )
    return subject, html, text


def render_credentials_email(*, name: str, password: str) -> tuple[str, str, str]:
    """Return ``(subject, html, text)`` for a password reset."""

    platform = get_settings().platform_name
    subject = f"{platform} - Password Reset"
    body = (
        f"<p>Hello {escape(name)},</p>"
        "<p>A new temporary password was generated for your account.</p>"
        f"<p><strong>Temporary password:</strong> {escape(password)}</p>"
        "<p>If you did not request this change, please contact an administrator.</p>"
    )
    html = _wrap(body, accent=_ACCOUNT_ACCENT, footer=platform)
    text = (
        f"Hello {name},\n\nA new temporary password was generated for your account.\n"
        f"Temporary password: {password}\n\n"
        "If you did not request this change, please contact an administrator.\n"
    )
    return subject, html, text


__all__ = [
    "render_credentials_email",
    "render_notification_email",
    "render_welcome_email",
]
