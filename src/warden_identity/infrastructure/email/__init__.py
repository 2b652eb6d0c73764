from warden_identity.infrastructure.email.smtp_mailer import SMTPMailer

__all__ = ["SMTPMailer"]
