"""Message template system using Jinja2.

Template categories follow the contact categories, plus "birthday".
Templates are plain text (no autoescape); they end up in an SMS or chat
box, not in HTML.

Variables available to a template:
    - first_name, last_name, full_name
    - {NAME} in older stored templates means first_name

Usage:
    from kinkeep.engine.templates import order_templates, render_message

    for template in order_templates(templates, scored_contact):
        print(render_message(template, scored_contact))
"""

from typing import Iterable

import jinja2

from kinkeep.core.exceptions import TemplateError
from kinkeep.core.logging import get_logger
from kinkeep.db.models import Contact, Template, TemplateCategory

logger = get_logger(__name__)

LEGACY_NAME_TOKEN = "{NAME}"

DEFAULT_TEMPLATES: tuple[Template, ...] = (
    Template(
        id="1",
        category=TemplateCategory.BIRTHDAY,
        text="Happy Birthday {{ first_name }}! 🎂 Hope you have a wonderful day!",
        is_default=True,
    ),
    Template(
        id="2",
        category=TemplateCategory.CASUAL,
        text="Hey {{ first_name }}, long time no see! How have you been?",
        is_default=True,
    ),
    Template(
        id="3",
        category=TemplateCategory.CASUAL,
        text="Thinking of you! We should catch up soon.",
        is_default=False,
    ),
    Template(
        id="4",
        category=TemplateCategory.RELIGIOUS,
        text="Eid Mubarak {{ first_name }}! May this day bring you joy and peace.",
        is_default=False,
    ),
    Template(
        id="5",
        category=TemplateCategory.FORMAL,
        text="Hi {{ first_name }}, hope you are doing well. I would love to connect soon.",
        is_default=True,
    ),
)

# Jinja2 environment (created once, reused)
_env: jinja2.Environment | None = None


def _get_env() -> jinja2.Environment:
    global _env
    if _env is None:
        _env = jinja2.Environment(
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )
    return _env


def _normalize(text: str) -> str:
    return text.replace(LEGACY_NAME_TOKEN, "{{ first_name }}")


def order_templates(templates: Iterable[Template], contact: Contact) -> list[Template]:
    """Order templates for the connect sheet.

    Birthday templates go first when the contact's birthday is upcoming and
    last otherwise. Within that, templates matching the contact's category
    come first, then defaults. Remaining ties keep input order.

    Args:
        templates: Available templates
        contact: Scored contact (is_birthday_upcoming must be current)

    Returns:
        New ordered list
    """
    contact_category = contact.category.value if contact.category else None

    def _key(t: Template) -> tuple[int, int, int]:
        is_birthday = t.category == TemplateCategory.BIRTHDAY
        if contact.is_birthday_upcoming:
            birthday_rank = 0 if is_birthday else 1
        else:
            birthday_rank = 1 if is_birthday else 0
        category_rank = 0 if contact_category and t.category.value == contact_category else 1
        default_rank = 0 if t.is_default else 1
        return (birthday_rank, category_rank, default_rank)

    return sorted(templates, key=_key)


def render_message(template: Template, contact: Contact) -> str:
    """Render a template's text for a contact.

    Args:
        template: Template to render
        contact: Contact supplying the names

    Returns:
        Message text

    Raises:
        TemplateError: On syntax errors or unknown variables
    """
    context = {
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "full_name": contact.full_name,
    }
    try:
        rendered = _get_env().from_string(_normalize(template.text)).render(**context)
    except jinja2.TemplateError as e:
        raise TemplateError(f"Cannot render template {template.id}: {e}") from e

    logger.debug(
        "Rendered template",
        extra={"context": {"template_id": template.id, "contact_id": contact.id}},
    )
    return rendered


def validate_template(text: str) -> list[str]:
    """Validate template text.

    Checks:
        - Text is not blank
        - Text parses without Jinja2 syntax errors

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    if not text.strip():
        issues.append("Template text is empty")
        return issues

    try:
        _get_env().parse(_normalize(text))
    except jinja2.TemplateSyntaxError as e:
        issues.append(f"Template syntax error: {e}")

    return issues
