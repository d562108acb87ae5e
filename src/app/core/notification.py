from functools import lru_cache

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.core.config import EmailSettings, email_settings


def build_mail_config(mail_settings: EmailSettings) -> ConnectionConfig:
    """Собирает параметры SMTP-подключения из настроек NOTIFY_."""
    return ConnectionConfig(
        MAIL_USERNAME=mail_settings.MAIL_USERNAME,
        MAIL_PASSWORD=mail_settings.MAIL_PASSWORD,
        MAIL_FROM=mail_settings.MAIL_FROM,
        MAIL_PORT=mail_settings.MAIL_PORT,
        MAIL_SERVER=mail_settings.MAIL_SERVER,
        MAIL_STARTTLS=mail_settings.MAIL_STARTTLS,
        MAIL_SSL_TLS=mail_settings.MAIL_SSL_TLS,
        USE_CREDENTIALS=mail_settings.USE_CREDENTIALS,
        VALIDATE_CERTS=mail_settings.VALIDATE_CERTS,
    )


@lru_cache
def fastmail() -> FastMail:
    """Клиент FastMail процесса воркера."""
    return FastMail(build_mail_config(email_settings))


async def send_notification(
    emails: list[str],
    text: str,
    subject: str,
    html: bool,
) -> None:
    """Отправляет уведомление по SMTP."""
    message = MessageSchema(
        subject=subject,
        recipients=emails,
        body=text,
        subtype=MessageType.html if html else MessageType.plain,
    )
    await fastmail().send_message(message)
