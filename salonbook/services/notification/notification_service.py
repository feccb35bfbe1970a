# ===== salonbook/services/notification/notification_service.py =====
"""
Booking notifications

When a client books, the owner gets an email and the client gets an SMS
confirming the request. Delivery problems are logged and never undo the
booking itself.
"""
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Dict, Optional
import logging

import requests
from twilio.rest import Client
from twilio.base.exceptions import TwilioException

from salonbook.config.settings import get_settings
from salonbook.models.booking import Booking
from salonbook.models.profile import Profile
from salonbook.models.service import Service

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails via SMTP"""

    @staticmethod
    def _get_smtp_connection():
        """Create and return SMTP connection"""
        settings = get_settings()
        if settings.EMAIL_USE_TLS:
            server = smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT)
            server.starttls()
        else:
            server = smtplib.SMTP_SSL(settings.EMAIL_HOST, settings.EMAIL_PORT)

        if settings.EMAIL_USERNAME and settings.EMAIL_PASSWORD:
            server.login(settings.EMAIL_USERNAME, settings.EMAIL_PASSWORD)

        return server

    @staticmethod
    def send_email(to_email: str, subject: str, plain_text: str) -> None:
        settings = get_settings()

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM_ADDRESS}>"
        msg['To'] = to_email
        msg.attach(MIMEText(plain_text, 'plain', 'utf-8'))

        server = EmailService._get_smtp_connection()
        try:
            server.sendmail(settings.EMAIL_FROM_ADDRESS, [to_email], msg.as_string())
        finally:
            server.quit()

        logger.info(f"Email sent successfully to {to_email}")


class SMSService:
    """Thin wrapper over the Twilio REST client"""

    def __init__(self, client: Optional[Client] = None):
        settings = get_settings()
        self.from_number = settings.TWILIO_FROM_NUMBER
        self.client = client or Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)

    def send_sms(self, to_phone: str, message_body: str) -> str:
        message = self.client.messages.create(
            body=message_body,
            from_=self.from_number,
            to=to_phone
        )
        logger.info(f"SMS sent successfully to {to_phone}: {message.sid}")
        return message.sid


def format_booking_time(booking: Booking, tz) -> Dict[str, str]:
    """Local date and 'HH:MM - HH:MM' range for messages"""
    start = booking.start_time.astimezone(tz)
    end = booking.end_time.astimezone(tz)
    return {
        "date": start.strftime("%A, %d %B %Y"),
        "time": f"{start.strftime('%H:%M')} - {end.strftime('%H:%M')}",
    }


class NotificationService:
    """Sends the new-booking email to the owner and SMS to the client"""

    def __init__(self, email_service=None, sms_service=None):
        self.email_service = email_service or EmailService
        self._sms_service = sms_service

    @property
    def sms_service(self):
        if self._sms_service is None:
            self._sms_service = SMSService()
        return self._sms_service

    def notify_booking_created(
            self,
            profile: Profile,
            service: Service,
            booking: Booking,
            tz
    ) -> Dict[str, bool]:
        """
        Returns {"email_sent": bool, "sms_sent": bool}.
        Failures are logged, not raised.
        """
        settings = get_settings()
        result = {"email_sent": False, "sms_sent": False}

        if not settings.NOTIFICATIONS_ENABLED:
            logger.debug(f"Notifications disabled, skipping booking {booking.id}")
            return result

        try:
            when = format_booking_time(booking, tz)
        except (ValueError, AttributeError) as e:
            logger.error(f"Could not format time of booking {booking.id} for notifications: {e}")
            return result

        try:
            self.email_service.send_email(
                to_email=profile.email,
                subject=f"New booking - {booking.client_name}",
                plain_text=(
                    f"Hello {profile.name},\n\n"
                    f"You have a new booking:\n\n"
                    f"Client: {booking.client_name}\n"
                    f"Phone: {booking.client_phone}\n"
                    f"Service: {service.name}\n"
                    f"Date: {when['date']}\n"
                    f"Time: {when['time']}\n\n"
                    f"Sign in to your account to confirm it."
                )
            )
            result["email_sent"] = True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to email owner about booking {booking.id}: {e}")

        if settings.TWILIO_ACCOUNT_SID and settings.TWILIO_FROM_NUMBER:
            try:
                self.sms_service.send_sms(
                    to_phone=booking.client_phone,
                    message_body=(
                        f"Your booking at {profile.name} was received. "
                        f"{when['date']}, {when['time']}. Service: {service.name}."
                    )
                )
                result["sms_sent"] = True
            except (TwilioException, requests.RequestException, OSError) as e:
                logger.error(f"Failed to text client about booking {booking.id}: {e}")
        else:
            logger.info("Twilio is not configured, client SMS skipped")

        return result
