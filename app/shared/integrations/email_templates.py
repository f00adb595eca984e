# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_templates.py

Helper para carga y renderizado de templates de email.
Convención: todos los templates viven en templates/emails/ con nombres *_email.(html|txt).

Además construye los cuerpos (asunto, html, texto) de los correos del
marketplace: confirmación de compra y notificaciones de retiro.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import html as html_lib
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Directorio canónico de templates
EMAILS_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"

# (subject, html, text)
EmailBody = Tuple[str, str, str]


def get_emails_dir() -> Path:
    """Retorna el directorio canónico de templates de email."""
    return EMAILS_DIR


def load_template(template_name: str) -> Optional[str]:
    """
    Carga template desde templates/emails/.

    Args:
        template_name: Nombre del archivo (ej: "purchase_confirmation_email.html")

    Returns:
        Contenido del template o None si no existe.
    """
    path = EMAILS_DIR / template_name
    if not path.exists():
        logger.debug("[EmailTemplates] not found: %s", template_name)
        return None
    content = path.read_text(encoding="utf-8")
    logger.debug("[EmailTemplates] loaded: %s", template_name)
    return content


def render_template(raw: str, context: Dict[str, Any], escape: bool = False) -> str:
    """
    Renderiza template reemplazando placeholders {{ variable }} y {{variable}}.

    Con ``escape=True`` los valores se escapan para HTML, salvo las claves
    que terminan en ``_html`` (fragmentos ya construidos).
    """
    result = raw
    for key, value in context.items():
        text = str(value)
        if escape and not key.endswith("_html"):
            text = html_lib.escape(text)
        result = result.replace(f"{{{{ {key} }}}}", text)
        result = result.replace(f"{{{{{key}}}}}", text)
    return result


def render_email(
    template_base: str,
    context: Dict[str, Any],
) -> Tuple[Optional[str], Optional[str], bool]:
    """
    Renderiza email completo (HTML y texto) desde templates/emails/.

    Returns:
        (html, text, used_template) - html/text pueden ser None si no hay template
    """
    html_content = load_template(f"{template_base}.html")
    txt_content = load_template(f"{template_base}.txt")

    used_template = html_content is not None

    html = render_template(html_content, context, escape=True) if html_content else None
    text = render_template(txt_content, context) if txt_content else None

    return html, text, used_template


def format_brl(amount: Decimal | float | int) -> str:
    """Formatea un monto como moneda brasileña: R$ 1.234,56."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, cents = f"{abs(value):.2f}".partition(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}R$ {grouped},{cents}"


def mask_email(email: str) -> str:
    """Enmascara email para logging (primeros 3 caracteres)."""
    if not email:
        return "unknown"
    return email[:3] + "***"


def _finish(template_base: str, context: Dict[str, Any], subject: str) -> EmailBody:
    html, text, used_template = render_email(template_base, context)
    if not text:
        text = "\n".join(f"{k}: {v}" for k, v in context.items() if not k.endswith("_html"))
    if not html:
        html = f"<pre>{html_lib.escape(text)}</pre>"
    logger.debug(
        "[EmailTemplates] body built: %s template=%s",
        template_base, "loaded" if used_template else "fallback",
    )
    return subject, html, text


def build_purchase_confirmation_body(
    *,
    user_name: str,
    event_title: str,
    event_date: str,
    event_venue: str,
    ticket_type: str,
    quantity: int,
    total_price: Decimal,
    qr_codes: Sequence[str],
) -> EmailBody:
    """Construye el correo de confirmación de compra (un QR por ingreso)."""
    qr_blocks = []
    for index, qr_code in enumerate(qr_codes, start=1):
        src = html_lib.escape(qr_code, quote=True)
        qr_blocks.append(
            '<div style="margin-bottom: 20px; padding: 15px; background: #f9f9f9; border-radius: 8px;">'
            f'<h3 style="margin: 0 0 10px 0; color: #333;">Ingresso {index}</h3>'
            f'<img src="{src}" alt="QR Code {index}" style="max-width: 200px; height: auto;" />'
            '<p style="margin: 10px 0 0 0; font-size: 12px; color: #666;">'
            "Apresente este QR Code na entrada do evento</p></div>"
        )

    context = {
        "user_name": user_name or "Cliente",
        "event_title": event_title,
        "event_date": event_date,
        "event_venue": event_venue,
        "ticket_type": ticket_type,
        "quantity": quantity,
        "total_price": format_brl(total_price),
        "qr_codes_html": "".join(qr_blocks),
        "qr_codes_text": "\n".join(f"Ingresso {i}: {qr}" for i, qr in enumerate(qr_codes, start=1)),
        "year": datetime.now(timezone.utc).year,
    }
    return _finish(
        "purchase_confirmation_email", context, f"Confirmação de Compra - {event_title}"
    )


def build_withdrawal_completed_body(
    *,
    full_name: str,
    amount: Decimal,
    producer_document: str,
    payout_reference: str,
) -> EmailBody:
    context = {
        "full_name": full_name or "Produtor",
        "amount": format_brl(amount),
        "producer_document": producer_document,
        "payout_reference": payout_reference,
    }
    return _finish("withdrawal_completed_email", context, "Saque aprovado - Mister Ticket")


def build_withdrawal_rejected_body(
    *,
    full_name: str,
    amount: Decimal,
    rejection_reason: str,
) -> EmailBody:
    context = {
        "full_name": full_name or "Produtor",
        "amount": format_brl(amount),
        "rejection_reason": rejection_reason,
    }
    return _finish("withdrawal_rejected_email", context, "Saque rejeitado - Mister Ticket")


__all__ = [
    "EmailBody",
    "get_emails_dir",
    "load_template",
    "render_template",
    "render_email",
    "format_brl",
    "mask_email",
    "build_purchase_confirmation_body",
    "build_withdrawal_completed_body",
    "build_withdrawal_rejected_body",
]
