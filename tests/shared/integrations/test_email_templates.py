# -*- coding: utf-8 -*-
"""Render de templates de correo de órdenes."""

import pytest

from app.shared.integrations.email_templates import get_emails_dir, render_email, render_template

ORDER_TEMPLATES = [
    "order_confirmation_email",
    "admin_order_notification_email",
    "contract_ready_email",
    "contract_signed_email",
    "invoice_generated_email",
    "service_provisioned_email",
    "refund_processed_email",
]


@pytest.mark.parametrize("name", ORDER_TEMPLATES)
def test_every_order_template_has_html_and_text(name):
    assert (get_emails_dir() / f"{name}.html").exists()
    assert (get_emails_dir() / f"{name}.txt").exists()


def test_html_values_are_escaped_except_fragments():
    raw = "<p>{{ client_name }}</p><table>{{ items_html }}</table>"

    out = render_template(raw, {"client_name": "<b>Ada</b>", "items_html": "<tr><td>x</td></tr>"}, escape=True)

    assert out == "<p>&lt;b&gt;Ada&lt;/b&gt;</p><table><tr><td>x</td></tr></table>"


def test_missing_template_renders_nothing():
    html, text, used = render_email("does_not_exist", {})

    assert (html, text, used) == (None, None, False)


def test_refund_template_renders_context():
    html, text, used = render_email(
        "refund_processed_email",
        {"client_name": "Ada", "order_id": "ord-1", "amount": "$40.00"},
    )

    assert used is True
    assert "$40.00" in text
    assert "ord-1" in html
