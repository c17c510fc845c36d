"""
Tests for the Navigator.
"""

from fittrack_gui.navigation import Navigator, Route, route_for_role


class TestNavigator:
    """Test route changes and guards."""

    def setup_method(self):
        """Start logged out."""
        self.user = None

    def _navigator(self):
        return Navigator(lambda: self.user)

    def test_initial_route(self, qapp):
        """Test the landing page."""
        assert self._navigator().current is Route.HOME

    def test_navigate(self, qtbot):
        """Test a plain route change."""
        navigator = self._navigator()

        with qtbot.waitSignal(navigator.routeChanged, timeout=1000) as blocker:
            assert navigator.navigate(Route.LOGIN) is Route.LOGIN

        assert blocker.args == [Route.LOGIN]
        assert navigator.current is Route.LOGIN

    def test_protected_route_redirects_to_login(self, qapp):
        """Test that protected pages need a user."""
        navigator = self._navigator()

        assert navigator.navigate(Route.TRAINER_PANEL) is Route.LOGIN
        assert navigator.current is Route.LOGIN

    def test_protected_route_with_user(self, qapp):
        """Test that a logged-in user reaches protected pages."""
        self.user = {"email": "a@b.com"}
        navigator = self._navigator()

        assert navigator.navigate(Route.LOG_WORKOUT) is Route.LOG_WORKOUT

    def test_navigate_later(self, qtbot):
        """Test a delayed route change."""
        navigator = self._navigator()

        navigator.navigate_later(Route.LOGIN, 50)
        assert navigator.pending is Route.LOGIN
        assert navigator.current is Route.HOME

        with qtbot.waitSignal(navigator.routeChanged, timeout=1000):
            pass
        assert navigator.current is Route.LOGIN
        assert navigator.pending is None

    def test_cancel_pending(self, qtbot):
        """Test cancelling a delayed route change."""
        navigator = self._navigator()
        navigator.navigate_later(Route.LOGIN, 50)

        navigator.cancel_pending()

        qtbot.wait(150)
        assert navigator.current is Route.HOME

    def test_route_for_role(self):
        """Test the post-login landing pages."""
        assert route_for_role("trainer") is Route.TRAINER_PANEL
        assert route_for_role("client") is Route.LOG_WORKOUT
        assert route_for_role(None) is Route.LOG_WORKOUT
