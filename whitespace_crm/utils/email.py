import html
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from whitespace_crm.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, html_content: str, text_content: str = None):
    """
    Send an email via SMTP.

    Args:
        to_email: Recipient email address
        subject: Email subject
        html_content: HTML content of the email
        text_content: Plain text content (optional, fallback)
    """
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg['To'] = to_email

    if text_content:
        msg.attach(MIMEText(text_content, 'plain'))
    msg.attach(MIMEText(html_content, 'html'))

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.ehlo()
        server.starttls()
        server.ehlo()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.sendmail(settings.SMTP_FROM_EMAIL, to_email, msg.as_string())
    logger.info("Email sent to %s", to_email)


def render_team_invite(
    team_name: str,
    inviter_name: str,
    invite_link: str,
    role: str,
    expires_in_days: int = 7,
) -> tuple[str, str, str]:
    """Return (subject, html, text) for a team invite email."""
    subject = f"{inviter_name} invited you to join {team_name} on {settings.SMTP_FROM_NAME}"

    team = html.escape(team_name)
    inviter = html.escape(inviter_name)
    link = html.escape(invite_link, quote=True)
    role_label = html.escape(role)

    html_content = f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>Team Invitation</title>
    </head>
    <body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f5f5f5;">
        <table role="presentation" width="100%" style="border-collapse: collapse;">
            <tr>
                <td align="center" style="padding: 40px 0;">
                    <table role="presentation" width="600" style="background-color: #ffffff; border-radius: 8px;">
                        <tr>
                            <td style="padding: 40px 40px 20px; text-align: center;">
                                <h1 style="margin: 0; font-size: 32px; color: #1a1a1a;">{html.escape(settings.SMTP_FROM_NAME)}</h1>
                            </td>
                        </tr>
                        <tr>
                            <td style="padding: 20px 40px;">
                                <h2 style="margin: 0 0 20px; font-size: 24px; color: #1a1a1a;">You're invited to join {team}</h2>
                                <p style="font-size: 16px; line-height: 1.6; color: #4a4a4a;">
                                    <strong>{inviter}</strong> has invited you to join their team as a <strong>{role_label}</strong>.
                                </p>
                                <p style="text-align: center; padding: 20px 0;">
                                    <a href="{link}" style="display: inline-block; padding: 14px 32px; background-color: #84cc16; color: #ffffff; text-decoration: none; border-radius: 6px; font-weight: 600;">View Invitation</a>
                                </p>
                                <p style="font-size: 14px; color: #6b7280;">Or copy and paste this link into your browser:<br>{link}</p>
                                <p style="font-size: 14px; color: #6b7280;">This invitation will expire in {expires_in_days} days.</p>
                            </td>
                        </tr>
                    </table>
                </td>
            </tr>
        </table>
    </body>
    </html>
    """

    text_content = (
        f"You're invited to join {team_name}\n\n"
        f"{inviter_name} has invited you to join their team as a {role}.\n\n"
        f"View the invitation: {invite_link}\n\n"
        f"This invitation will expire in {expires_in_days} days.\n"
    )
    return subject, html_content, text_content


def send_team_invite_email(
    to_email: str,
    team_name: str,
    inviter_name: str,
    invite_link: str,
    role: str,
    expires_in_days: int = 7,
):
    """Render and send a team invite email. Raises on SMTP failure."""
    subject, html_content, text_content = render_team_invite(
        team_name, inviter_name, invite_link, role, expires_in_days
    )
    send_email(to_email, subject, html_content, text_content)
