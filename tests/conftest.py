"""
Test configuration and fixtures for crawler tests
"""

from unittest.mock import MagicMock

import pytest


def make_response(status_code=200, text=""):
    """Build a stand-in for requests.Response"""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def fake_session():
    """
    Factory for a mock requests.Session serving a scripted site.

    ``pages`` maps a URL to a (status, html) reply or a list of replies
    served in order; the last reply repeats. Unknown URLs answer 404.
    """

    def factory(pages):
        scripts = {
            url: list(replies) if isinstance(replies, list) else [replies]
            for url, replies in pages.items()
        }

        def get(url, **kwargs):
            replies = scripts.get(url)
            if not replies:
                return make_response(404, "")
            status, html = replies.pop(0) if len(replies) > 1 else replies[0]
            return make_response(status, html)

        session = MagicMock()
        session.get.side_effect = get
        return session

    return factory

