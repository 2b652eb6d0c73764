"""Ports the identity services depend on."""

from warden_identity.application.ports.mailer import EmailMessage, EmailTemplate, Mailer

__all__ = ["EmailMessage", "EmailTemplate", "Mailer"]
