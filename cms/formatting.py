from urllib.parse import urlparse

import bleach
import markdown


# --------------
# Sanitized HTML
# --------------

ALLOWED_TAGS = set(bleach.sanitizer.ALLOWED_TAGS) | {
    'p', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'br', 'hr', 'pre', 'img', 'iframe'
}
ALLOWED_IFRAME_HOSTNAMES = {'www.youtube.com'}


def _allowed_attribute(tag, name, value):
    if name in bleach.sanitizer.ALLOWED_ATTRIBUTES.get(tag, []):
        return True
    if tag == 'img':
        return name in ('src', 'alt', 'title')
    if tag == 'iframe':
        if name == 'src':
            return urlparse(value).hostname in ALLOWED_IFRAME_HOSTNAMES
        return name in ('width', 'height', 'allowfullscreen', 'frameborder')
    return False


def render_markdown(text: str) -> str:
    return markdown.markdown(text or '', extensions=['fenced_code'])


def clean_html(html: str) -> str:
    """Remove any tags and attributes that are not safe to display."""
    return bleach.clean(html or '', tags=ALLOWED_TAGS, attributes=_allowed_attribute, strip=True)


def strip_html(html: str) -> str:
    """Remove all tags."""
    return bleach.clean(html or '', tags=set(), attributes={}, strip=True)


# ----------
# Timestamps
# ----------

def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return 'th'
    return {1: 'st', 2: 'nd', 3: 'rd'}.get(day % 10, 'th')


def format_timestamp(value) -> str:
    """Format a datetime for display (e.g. 'October 19th 2026 at 3:04:05 pm')."""
    if value is None:
        return ''
    hour = value.hour % 12 or 12
    meridiem = 'am' if value.hour < 12 else 'pm'
    return (f'{value:%B} {value.day}{_ordinal_suffix(value.day)} {value:%Y} '
            f'at {hour}:{value:%M:%S} {meridiem}')
