"""Tests for studenthub.adapters.local_auth — LocalAuthProvider."""

from studenthub.adapters.local_auth import LocalAuthProvider
from studenthub.ports.auth_port import AuthState


class TestLocalAuthProvider:
    def test_subscriber_gets_current_state(self):
        auth = LocalAuthProvider(user_id="u1")
        seen = []
        auth.on_auth_state_changed(seen.append)
        assert seen == [AuthState(user=None, is_loading=False)]

    def test_login_uses_default_user(self):
        auth = LocalAuthProvider(user_id="u1")
        auth.login()
        assert auth.state.user.id == "u1"

    def test_login_with_explicit_user(self):
        auth = LocalAuthProvider(user_id="u1")
        auth.login("u9")
        assert auth.state.user.id == "u9"

    def test_default_user_from_settings(self):
        auth = LocalAuthProvider()
        auth.login()
        assert auth.state.user.id == "local-user"

    def test_logout_notifies(self):
        auth = LocalAuthProvider(user_id="u1")
        seen = []
        auth.on_auth_state_changed(seen.append)
        auth.login()
        auth.logout()
        assert [s.user.id if s.user else None for s in seen] == [None, "u1", None]

    def test_unsubscribe(self):
        auth = LocalAuthProvider(user_id="u1")
        seen = []
        unsubscribe = auth.on_auth_state_changed(seen.append)
        unsubscribe()
        unsubscribe()
        auth.login()
        assert len(seen) == 1
