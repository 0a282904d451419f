"""
Tests for invite email delivery.
"""
from unittest.mock import patch

from whitespace_crm.core.config import settings
from whitespace_crm.services.notification_service import InviteMailer
from whitespace_crm.utils.email import render_team_invite


class TestInviteMailer:
    """Best-effort invite delivery."""

    def test_skipped_without_smtp(self):
        with patch.object(settings, "SMTP_HOST", ""):
            result = InviteMailer().send_team_invite(
                to_email="bob@x.com",
                team_name="Team One",
                inviter_name="Alice",
                invite_link="http://localhost:3000/team/invites",
                role="member",
            )
        assert result.delivered is False
        assert result.error == "email delivery disabled"

    @patch("whitespace_crm.services.notification_service.send_team_invite_email")
    def test_sends_when_configured(self, mock_send):
        with patch.object(settings, "SMTP_HOST", "smtp.example.com"):
            result = InviteMailer().send_team_invite(
                to_email="bob@x.com",
                team_name="Team One",
                inviter_name="Alice",
                invite_link="http://localhost:3000/team/invites",
                role="admin",
            )
        assert result.delivered is True
        assert result.error is None
        mock_send.assert_called_once()
        kwargs = mock_send.call_args.kwargs
        assert kwargs["to_email"] == "bob@x.com"
        assert kwargs["role"] == "admin"
        assert kwargs["expires_in_days"] == settings.INVITE_EXPIRE_DAYS

    @patch("whitespace_crm.services.notification_service.send_team_invite_email")
    def test_failure_is_reported_not_raised(self, mock_send):
        mock_send.side_effect = OSError("connection refused")
        with patch.object(settings, "SMTP_HOST", "smtp.example.com"):
            result = InviteMailer().send_team_invite(
                to_email="bob@x.com",
                team_name="Team One",
                inviter_name="Alice",
                invite_link="http://localhost:3000/team/invites",
                role="member",
            )
        assert result.delivered is False
        assert "connection refused" in result.error


def test_render_team_invite_escapes_html():
    subject, html_content, text_content = render_team_invite(
        team_name="<script>Team</script>",
        inviter_name="Alice & Co",
        invite_link="http://localhost:3000/team/invites",
        role="member",
        expires_in_days=7,
    )
    assert "Alice & Co" in subject
    assert "&lt;script&gt;Team&lt;/script&gt;" in html_content
    assert "<script>" not in html_content
    assert "Alice &amp; Co" in html_content
    assert "expire in 7 days" in text_content
