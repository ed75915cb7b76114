"""Validate route authorization decisions."""

import pytest

from inventory_client.core.exceptions import RouteNotFoundError
from inventory_client.session.gate import Decision, RouteAuthorizationGate, can_enter
from inventory_client.session.routes import RoutePolicy, RouteTable


class TestCanEnter:
    """Test the bare decision function."""

    def test_anonymous_denied_everywhere(self, session):
        """Without a token every protected destination redirects to login."""
        for requires_admin in (False, True):
            decision = can_enter(requires_admin, "/dashboard", session)
            assert decision == Decision(
                allow=False, redirect_to="/login", preserve_return_path="/dashboard"
            )

    def test_user_allowed_on_plain_routes(self, user_session):
        """Authenticated users enter non-admin destinations."""
        assert can_enter(False, "/sell", user_session).allow

    def test_user_denied_on_admin_routes(self, user_session):
        """Non-admins are redirected from admin destinations."""
        decision = can_enter(True, "/product", user_session)

        assert not decision.allow
        assert decision.redirect_to == "/login"
        assert decision.preserve_return_path == "/product"

    def test_admin_allowed_everywhere(self, admin_session):
        """Admins enter both kinds of destination."""
        assert can_enter(True, "/product", admin_session).allow
        assert can_enter(False, "/sell", admin_session).allow

    def test_allowed_decision_has_no_redirect(self, admin_session):
        """An allowed decision carries no redirect."""
        decision = can_enter(False, "/sell", admin_session)
        assert decision.redirect_to is None
        assert decision.redirect_url() is None


class TestDecision:
    """Test redirect rendering."""

    def test_redirect_url_carries_return_path(self):
        """The requested path travels as the returnUrl parameter."""
        decision = Decision.denied("/edit-product/42")
        assert decision.redirect_url() == "/login?returnUrl=%2Fedit-product%2F42"

    def test_redirect_without_return_path(self):
        """A bare redirect has no query string."""
        assert Decision(allow=False, redirect_to="/login").redirect_url() == "/login"


class TestRouteTable:
    """Test route resolution."""

    def setup_method(self):
        """Prepare the default table."""
        self.table = RouteTable()

    @pytest.mark.parametrize(
        "path,requires_admin",
        [
            ("/category", True),
            ("/supplier", True),
            ("/add-supplier", True),
            ("/edit-supplier/7", True),
            ("/product", True),
            ("/add-product", True),
            ("/edit-product/3", True),
            ("/purchase", False),
            ("/sell", False),
            ("/transaction", False),
            ("/transaction/12", False),
            ("/profile", False),
            ("/dashboard", False),
        ],
    )
    def test_protected_routes(self, path, requires_admin):
        """Every application destination has its admin flag."""
        route = self.table.resolve(path)
        assert route is not None
        assert route.protected
        assert route.requires_admin is requires_admin

    def test_public_routes(self):
        """Login and register need no session."""
        assert not self.table.resolve("/login").protected
        assert not self.table.resolve("register").protected

    def test_query_string_is_ignored(self):
        """Matching only looks at the path."""
        assert self.table.resolve("/login?returnUrl=%2Fsell").pattern == "login"

    def test_unknown_route(self):
        """Paths outside the table do not resolve."""
        assert self.table.resolve("/reports/annual") is None

    def test_path_parameters(self):
        """Placeholders capture their segment."""
        route = self.table.resolve("/edit-product/99")
        assert route.match("/edit-product/99") == {"productId": "99"}


class TestRouteAuthorizationGate:
    """Test gate decisions through the route table."""

    def test_public_route_always_allowed(self, session):
        """Anonymous sessions may open the login page."""
        gate = RouteAuthorizationGate(session)
        assert gate.authorize("/login").allow

    def test_root_redirects_to_login(self, admin_session):
        """The empty path sends everyone to login."""
        decision = RouteAuthorizationGate(admin_session).authorize("/")

        assert not decision.allow
        assert decision.redirect_to == "/login"
        assert decision.redirect_url() == "/login"

    def test_user_on_admin_route(self, user_session):
        """Denial preserves the requested path with parameters."""
        decision = RouteAuthorizationGate(user_session).authorize("/edit-supplier/5")

        assert not decision.allow
        assert decision.preserve_return_path == "/edit-supplier/5"

    def test_user_on_plain_route(self, user_session):
        """Users may open the transaction details."""
        assert RouteAuthorizationGate(user_session).authorize("/transaction/5").allow

    def test_unknown_route_raises(self, admin_session):
        """Navigation to an unknown path is an error, not a denial."""
        with pytest.raises(RouteNotFoundError) as exc_info:
            RouteAuthorizationGate(admin_session).authorize("/nowhere")
        assert exc_info.value.path == "/nowhere"

    def test_custom_routes(self, user_session):
        """A gate can be built over a custom table."""
        table = RouteTable([RoutePolicy("reports", requires_admin=True)])
        gate = RouteAuthorizationGate(user_session, table)

        assert not gate.authorize("/reports").allow
        with pytest.raises(RouteNotFoundError):
            gate.authorize("/dashboard")

    def test_decision_follows_logout(self, admin_session):
        """Decisions are re-evaluated on every navigation."""
        gate = RouteAuthorizationGate(admin_session)
        assert gate.authorize("/category").allow

        admin_session.logout()
        assert not gate.authorize("/category").allow
