"""Outbound email port.

The identity services only describe what to send; a ``Mailer``
implementation decides how (SMTP, a queue, a test double).
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EmailTemplate:
    """Plain text (and optional HTML) body with ``str.format`` placeholders."""

    name: str
    text: str
    html: str | None = None

    def render(self, context: Mapping[str, Any]) -> tuple[str, str | None]:
        text = self.text.format(**context)
        html = self.html.format(**context) if self.html else None
        return text, html


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    template: EmailTemplate
    context: Mapping[str, Any] = field(default_factory=dict)


class Mailer(ABC):
    """Delivers rendered email messages."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver ``message``; raise on delivery failure."""
