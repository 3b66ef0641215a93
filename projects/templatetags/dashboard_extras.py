# -*- coding: utf-8 -*-
# projects/templatetags/dashboard_extras.py

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from django import template

from projects.services.progress import bulletize as _bulletize

register = template.Library()


@register.filter
def get_item(d, key):
    if d is None:
        return None
    try:
        return d.get(key)
    except AttributeError:
        try:
            return d[key]
        except (KeyError, IndexError, TypeError):
            return None


def _number(value):
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


@register.filter(name="peso")
def peso(value):
    """
    1234.5 -> "₱1,234.50". Blank stays blank.
    """
    if value is None or value == "":
        return ""
    n = _number(value)
    if n is None:
        return ""
    return f"₱{n:,.2f}"


@register.filter(name="pct")
def pct(value):
    n = _number(value if value not in (None, "") else 0)
    return f"{(n or 0):.2f}%"


@register.filter(name="signed_pct")
def signed_pct(value):
    n = _number(value if value not in (None, "") else 0) or Decimal(0)
    sign = "+" if n >= 0 else ""
    return f"{sign}{n:.2f}%"


@register.filter(name="bulletize")
def bulletize(value):
    return _bulletize(value)


@register.simple_tag
def status_badge_class(status: str) -> str:
    if status == "Delayed":
        return "danger"
    if status == "Completed":
        return "success"
    return "primary"
