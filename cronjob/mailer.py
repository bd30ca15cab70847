"""
Mail transport for job output.

Sends captured output as attachments over SMTP.
"""

import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import List, Sequence, Tuple, Union

from cronjob.config import JobSettings
from cronjob.errors import MailDispatchError

logger = logging.getLogger(__name__)

SUBJECT = 'Cronjob execution'
BODY_TEXT = 'Cronjob output attached'
BODY_HTML = '<q>Cronjob output attached</q>'

Attachment = Tuple[str, Union[str, bytes]]


class SmtpMailDispatcher:
    """SMTP mail transport."""

    def __init__(
        self,
        host: str = 'localhost',
        port: int = 25,
        username: str = '',
        password: str = '',
        use_tls: bool = False
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls

    @classmethod
    def from_settings(cls, settings: JobSettings) -> 'SmtpMailDispatcher':
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=settings.smtp_tls
        )

    @staticmethod
    def build_message(
        sender: Tuple[str, str],
        recipients: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str,
        attachments: Sequence[Attachment] = ()
    ) -> MIMEMultipart:
        """Assemble a multipart message with text, HTML and attachments."""
        address, name = sender

        msg = MIMEMultipart('mixed')
        msg['From'] = formataddr((name, address))
        msg['To'] = ', '.join(recipients)
        msg['Subject'] = subject

        body = MIMEMultipart('alternative')
        body.attach(MIMEText(body_text, 'plain', 'utf-8'))
        body.attach(MIMEText(body_html, 'html', 'utf-8'))
        msg.attach(body)

        for filename, content in attachments:
            if isinstance(content, str):
                content = content.encode('utf-8')
            part = MIMEApplication(content, Name=filename)
            part['Content-Disposition'] = f'attachment; filename="{filename}"'
            msg.attach(part)

        return msg

    def send(
        self,
        sender: Tuple[str, str],
        recipients: List[str],
        subject: str = SUBJECT,
        body_text: str = BODY_TEXT,
        body_html: str = BODY_HTML,
        attachments: Sequence[Attachment] = ()
    ):
        """
        Send a message.

        Args:
            sender: (address, display name) pair
            recipients: Destination addresses
            subject: Subject line
            body_text: Plain text body
            body_html: HTML alternative body
            attachments: (filename, content) pairs

        Raises:
            MailDispatchError: If the message cannot be delivered
        """
        if not recipients:
            raise MailDispatchError("No recipients given")

        msg = self.build_message(sender, recipients, subject, body_text, body_html, attachments)

        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(msg, from_addr=sender[0], to_addrs=list(recipients))
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {', '.join(recipients)}: {e}")
            raise MailDispatchError(f"Failed to send email: {e}") from e

        logger.info(f"Email sent to {', '.join(recipients)}: {subject}")
