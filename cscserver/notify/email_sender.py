"""Welcome email delivery over SMTP."""

from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Callable, Optional, Tuple

from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from cscserver.config import GatewayConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True)
class WelcomeDetails:
    email: str
    name: str
    date_naissance: str
    filiere: str
    code_massar: str
    user_code: str


def _is_retryable_smtp(exc: BaseException) -> bool:
    # Bad credentials or refused recipients will not fix themselves.
    if isinstance(exc, (smtplib.SMTPAuthenticationError, smtplib.SMTPRecipientsRefused)):
        return False
    return isinstance(exc, (smtplib.SMTPException, OSError))


def render_welcome(details: WelcomeDetails) -> Tuple[str, str]:
    plain = (
        f"Bonjour {details.name},\n\n"
        "Bienvenue ! Votre inscription a bien été enregistrée.\n\n"
        f"Date de naissance : {details.date_naissance}\n"
        f"Filière : {details.filiere}\n"
        f"Code Massar : {details.code_massar}\n"
        f"Code utilisateur : {details.user_code}\n\n"
        "Conservez ce code, il vous sera demandé pour vous connecter.\n"
    )
    e = html.escape
    body = (
        "<html><body>"
        f"<p>Bonjour <strong>{e(details.name)}</strong>,</p>"
        "<p>Bienvenue ! Votre inscription a bien été enregistrée.</p>"
        "<ul>"
        f"<li>Date de naissance : {e(details.date_naissance)}</li>"
        f"<li>Filière : {e(details.filiere)}</li>"
        f"<li>Code Massar : {e(details.code_massar)}</li>"
        f"<li>Code utilisateur : <strong>{e(details.user_code)}</strong></li>"
        "</ul>"
        "<p>Conservez ce code, il vous sera demandé pour vous connecter.</p>"
        "</body></html>"
    )
    return plain, body


class EmailSender:
    def __init__(self, config: GatewayConfig, smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP):
        self.config = config
        self.smtp_factory = smtp_factory

    @retry(
        retry=retry_if_exception(_is_retryable_smtp),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=8),
        reraise=True,
    )
    def _deliver(self, msg: MIMEMultipart, recipient: str) -> None:
        server = self.smtp_factory(self.config.email_smtp_server, self.config.email_smtp_port, timeout=30)
        try:
            server.starttls()
            server.login(self.config.email_user, self.config.email_password)
            server.sendmail(self.config.email_user, [recipient], msg.as_string())
        finally:
            server.quit()

    def send_welcome_email(self, details: WelcomeDetails) -> EmailResult:
        if not self.config.email_configured:
            return EmailResult(success=False, error="Email service is not configured")

        plain, body = render_welcome(details)
        msg = MIMEMultipart("alternative")
        msg['From'] = self.config.email_user
        msg['To'] = details.email
        msg['Subject'] = "Bienvenue - confirmation d'inscription"
        message_id = make_msgid()
        msg['Message-ID'] = message_id
        msg.attach(MIMEText(plain, 'plain', 'utf-8'))
        msg.attach(MIMEText(body, 'html', 'utf-8'))

        try:
            self._deliver(msg, details.email)
        except smtplib.SMTPAuthenticationError as e:
            logger.error("Email authentication failed - check credentials")
            return EmailResult(success=False, error="Failed to send email", details=str(e))
        except smtplib.SMTPRecipientsRefused as e:
            logger.error("Email recipient refused - check email address")
            return EmailResult(success=False, error="Recipient refused", details=str(e))
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP error: {e}")
            return EmailResult(success=False, error="Failed to send email", details=str(e))

        logger.info(f"Email sent successfully to {details.email}")
        return EmailResult(success=True, message_id=message_id)
