"""
Email Service
Handles sending complaint notification emails
"""

from flask import current_app
from flask_mail import Message
from markupsafe import escape
from extensions import mail


class EmailService:
    """Service for sending emails"""

    @staticmethod
    def send_email(to, subject, html_body, text_body=None):
        """Send an email"""
        try:
            msg = Message(
                subject=subject,
                recipients=[to] if isinstance(to, str) else to,
                html=html_body,
                body=text_body or html_body
            )
            mail.send(msg)
            return True
        except Exception as e:
            current_app.logger.error(f'Failed to send email: {str(e)}')
            return False

    @staticmethod
    def send_escalation_email(complaint, target, reason, escalated_by=None):
        """Notify the user a complaint was escalated to"""
        subject = f"Complaint #{complaint.id} escalated to you"
        frontend_url = current_app.config.get('FRONTEND_URL', 'http://localhost:3000')
        sender_name = escape(escalated_by.name) if escalated_by else 'A staff member'
        html_body = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2 style="color: #C0392B;">Complaint Escalated</h2>
                <p>Hi {escape(target.name)},</p>
                <p>{sender_name} has escalated a complaint to you for review.</p>

                <div style="background-color: #f8f8f8; padding: 20px; border-radius: 5px; margin: 20px 0;">
                    <h3 style="margin-top: 0; color: #333;">{escape(complaint.subject)}</h3>
                    <p><strong>Complaint ID:</strong> #{complaint.id}</p>
                    <p><strong>Category:</strong> {escape(complaint.category)}</p>
                    <p><strong>Urgency:</strong> {escape(complaint.urgency or 'Medium')}</p>
                    <p><strong>Reason:</strong> {escape(reason)}</p>
                </div>

                <div style="margin: 30px 0;">
                    <a href="{frontend_url}/admin/complaints/{complaint.id}"
                       style="background-color: #C0392B; color: white; padding: 12px 30px;
                              text-decoration: none; border-radius: 5px; display: inline-block;">
                        Open Complaint
                    </a>
                </div>
                <hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;">
                <p style="color: #999; font-size: 12px;">
                    This is an automated message. Please do not reply to this email.
                </p>
            </div>
        </body>
        </html>
        """
        text_body = (
            f"Complaint #{complaint.id} ({complaint.subject}) was escalated to you.\n"
            f"Reason: {reason}\n"
            f"{frontend_url}/admin/complaints/{complaint.id}"
        )
        return EmailService.send_email(target.email, subject, html_body, text_body)
