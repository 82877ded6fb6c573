"""Email templates for the Samachar admin console."""

from datetime import datetime
from typing import Optional


def _get_base_styles() -> str:
    """Inline CSS shared by all templates."""
    return """
    <style>
        body { margin: 0; padding: 0; font-family: 'Noto Sans', 'Segoe UI', Tahoma, sans-serif; }
        .email-container { max-width: 560px; margin: 0 auto; background-color: #ffffff; }
        .email-header { background-color: #b91c1c; padding: 28px 24px; text-align: center; }
        .email-header h1 { color: #ffffff; font-size: 22px; margin: 0; font-weight: 700; letter-spacing: 0.5px; }
        .email-body { padding: 28px 24px; color: #111827; line-height: 1.6; }
        .email-body p { margin: 0 0 14px 0; font-size: 15px; }
        .code-box { text-align: center; margin: 24px 0; }
        .code-box span { display: inline-block; font-family: monospace; font-size: 28px; letter-spacing: 6px; background: #f3f4f6; border: 1px solid #e5e7eb; border-radius: 6px; padding: 12px 20px; }
        .warning-box { background-color: #fef3c7; border-left: 4px solid #d97706; padding: 14px; margin: 20px 0; }
        .warning-box p { margin: 0; color: #92400e; font-size: 14px; }
        .email-footer { background-color: #f9fafb; padding: 20px; text-align: center; border-top: 1px solid #e5e7eb; }
        .email-footer p { margin: 0 0 6px 0; font-size: 12px; color: #6b7280; }
    </style>
    """


def _get_header(title: str = "Samachar") -> str:
    return f"""
    <div class="email-header">
        <h1>{title}</h1>
    </div>
    """


def _get_footer(year: Optional[int] = None) -> str:
    if year is None:
        year = datetime.now().year
    return f"""
    <div class="email-footer">
        <p>This message was sent automatically by the Samachar admin console.</p>
        <p>&copy; {year} Samachar</p>
    </div>
    """


def build_password_reset_code_email(
    *,
    name: str,
    code: str,
    expires_in_minutes: int = 15,
) -> tuple[str, str, str]:
    """Build the change-password verification email.

    Returns:
        Tuple of (subject, html_body, text_body)
    """
    subject = "Your Samachar verification code"

    html_body = f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        {_get_base_styles()}
    </head>
    <body style="background-color: #f3f4f6; padding: 24px 0;">
        <div class="email-container" style="border-radius: 10px; overflow: hidden;">
            {_get_header()}

            <div class="email-body">
                <p>Hello <strong>{name}</strong>,</p>

                <p>A password change was requested for your admin account. Enter this code to continue:</p>

                <div class="code-box"><span>{code}</span></div>

                <div class="warning-box">
                    <p>The code expires in <strong>{expires_in_minutes} minutes</strong>.
                    If you did not request this change, ignore this email and your password stays the same.</p>
                </div>
            </div>

            {_get_footer()}
        </div>
    </body>
    </html>
    """

    text_body = f"""
SAMACHAR - Verification code
============================

Hello {name},

A password change was requested for your admin account.

Verification code: {code}

The code expires in {expires_in_minutes} minutes. If you did not request
this change, ignore this email and your password stays the same.
"""

    return subject, html_body, text_body
