"""
This file (test_formatting.py) contains the unit tests for rendering and
sanitizing blog posts and for formatting timestamps.
"""
from datetime import datetime

from cms.formatting import (clean_html, format_timestamp, render_markdown,
                            strip_html)


def test_render_markdown():
    html = render_markdown('# Title\n\nSome **bold** text.')
    assert '<h1>Title</h1>' in html
    assert '<strong>bold</strong>' in html


def test_clean_html_removes_scripts():
    """
    GIVEN HTML containing a script tag and an event handler
    WHEN the HTML is cleaned
    THEN check that the script tag and the event handler are removed
    """
    html = clean_html('<p onclick="steal()">Hello</p><script>alert(1)</script>')
    assert '<script>' not in html
    assert 'onclick' not in html
    assert '<p>Hello</p>' in html


def test_clean_html_allows_images():
    html = clean_html('<img src="https://example.com/cat.png" alt="Cat" onerror="steal()">')
    assert 'src="https://example.com/cat.png"' in html
    assert 'alt="Cat"' in html
    assert 'onerror' not in html


def test_clean_html_iframes():
    """
    GIVEN HTML containing iframes from YouTube and from another website
    WHEN the HTML is cleaned
    THEN check that only the source of the YouTube iframe is kept
    """
    youtube = clean_html('<iframe src="https://www.youtube.com/embed/abc123"></iframe>')
    assert 'src="https://www.youtube.com/embed/abc123"' in youtube

    other = clean_html('<iframe src="https://evil.example.com/"></iframe>')
    assert 'evil.example.com' not in other


def test_strip_html():
    assert strip_html('<b>Lunch</b> <i>time</i>') == 'Lunch time'


def test_format_timestamp():
    assert format_timestamp(datetime(2026, 10, 19, 15, 4, 5)) == 'October 19th 2026 at 3:04:05 pm'
    assert format_timestamp(datetime(2022, 7, 1, 0, 29, 50)) == 'July 1st 2022 at 12:29:50 am'
    assert format_timestamp(datetime(2022, 7, 2, 12, 0, 0)) == 'July 2nd 2022 at 12:00:00 pm'
    assert format_timestamp(datetime(2022, 7, 3, 9, 5, 0)) == 'July 3rd 2022 at 9:05:00 am'
    assert format_timestamp(datetime(2022, 7, 11, 9, 5, 0)) == 'July 11th 2022 at 9:05:00 am'
    assert format_timestamp(datetime(2022, 7, 22, 9, 5, 0)) == 'July 22nd 2022 at 9:05:00 am'


def test_format_timestamp_none():
    assert format_timestamp(None) == ''
