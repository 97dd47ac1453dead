# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_templates.py

Helper para carga y renderizado de templates de email.
Convención: todos los templates viven en templates/emails/ como
<nombre>.html y <nombre>.txt, con placeholders {{ variable }}.

En HTML los valores se escapan, salvo las llaves que terminan en `_html`
(fragmentos ya construidos, p. ej. filas de una tabla).

Autor: Agency Hub
Fecha: 2026-09-04
"""

import html as html_lib
import logging
from pathlib import Path
from typing import Optional, Tuple, Dict, Any

logger = logging.getLogger(__name__)

# Directorio canónico de templates
EMAILS_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"


def get_emails_dir() -> Path:
    return EMAILS_DIR


def load_template(template_name: str) -> Optional[str]:
    """
    Carga template desde templates/emails/.

    Returns:
        Contenido del template o None si no existe.
    """
    path = EMAILS_DIR / template_name
    if not path.exists():
        logger.debug("[EmailTemplates] not found: %s", template_name)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("[EmailTemplates] error reading %s: %s", template_name, e)
        return None


def render_template(raw: str, context: Dict[str, Any], *, escape: bool = False) -> str:
    """Reemplaza placeholders {{ variable }} y {{variable}}."""
    result = raw
    for key, value in context.items():
        text = "" if value is None else str(value)
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
        (html, text, used_template); html/text son None si no hay template
    """
    html_content = load_template(f"{template_base}.html")
    txt_content = load_template(f"{template_base}.txt")

    used_template = html_content is not None

    html = render_template(html_content, context, escape=True) if html_content else None
    text = render_template(txt_content, context) if txt_content else None

    if not used_template:
        logger.debug("[EmailTemplates] no template for: %s", template_base)

    return html, text, used_template


__all__ = [
    "get_emails_dir",
    "load_template",
    "render_template",
    "render_email",
]
