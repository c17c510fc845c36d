"""
Fixtures shared by the GUI-layer tests.
"""

from unittest.mock import Mock

import pytest
from request_fixtures import FakeRequest

from fittrack_core.api_client import ApiClient
from fittrack_core.config_manager import ConfigManager
from fittrack_core.session_store import SessionStore
from fittrack_gui.app_context import AppContext


@pytest.fixture
def config():
    config = Mock(spec=ConfigManager)
    config.api_base_url = "http://localhost:3000/api/auth"
    config.toast_duration_ms = 5000
    config.debounce_ms = 50
    config.redirect_delay_ms = 100
    return config


@pytest.fixture
def session():
    session = Mock(spec=SessionStore)
    session.get_user.return_value = None
    session.set_user.return_value = True
    session.remove_user.return_value = True
    return session


@pytest.fixture
def context(qapp, config, session):
    context = AppContext(config=config, api=Mock(spec=ApiClient), session=session)
    context.init()
    yield context
    context.teardown()


@pytest.fixture
def fake_request():
    return FakeRequest()
