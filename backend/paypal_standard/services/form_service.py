"""
Form Rendering Service

Turns encoded PayPal fields into an HTML form that posts to the gateway.
All attribute values are HTML-escaped; field values are otherwise untouched.
"""
from html import escape
from typing import Iterable, Tuple
import json

from ..models.order import GATEWAY_URL, PresentationOptions


def _attr(value: str) -> str:
    return escape(str(value), quote=True)


def _js_string(value: str) -> str:
    """Quote a value as a JavaScript string literal safe inside <script>."""
    return json.dumps(value).replace("<", "\\u003c").replace(">", "\\u003e")


def render_hidden_input(name: str, value: str) -> str:
    return f'<input type="hidden" name="{_attr(name)}" value="{_attr(value)}">'


def render_auto_submit_script(form_name: str) -> str:
    return (
        '<script type="text/javascript">'
        f'document.forms[{_js_string(form_name)}].submit();'
        '</script>'
    )


def render_form(
    fields: Iterable[Tuple[str, str]],
    presentation: PresentationOptions,
    submit_url: str = GATEWAY_URL
) -> str:
    """
    Render the checkout form.

    Args:
        fields: Ordered (name, value) pairs from OrderEncoder.encode()
        presentation: Button and form options
        submit_url: Form action, the PayPal gateway by default

    Returns:
        HTML string. When auto_submit is set, a script submitting the
        form by name is appended after the closing form tag.
    """
    parts = [
        f'<form method="post" action="{_attr(submit_url)}" '
        f'name="{_attr(presentation.form_name)}" class="{_attr(presentation.form_class)}">'
    ]
    parts.extend(render_hidden_input(name, value) for name, value in fields)
    parts.append(
        f'<input type="submit" value="{_attr(presentation.button_text)}" '
        f'class="{_attr(presentation.button_class)}">'
    )
    parts.append('</form>')

    if presentation.auto_submit:
        parts.append(render_auto_submit_script(presentation.form_name))

    return "".join(parts)
