import pytest

from zerobuild.config import settings
from zerobuild.exceptions import InvalidCredentialsError
from zerobuild.models.domain import UserRole
from zerobuild.services.auth_service import (
    ClientSession,
    DeveloperSession,
    Session,
    SessionRegistry,
    login_client,
    login_developer,
    signup_client,
)


class TestClientPolicy:

    def test_signup_logs_in_immediately(self, storage):
        session = signup_client(storage, "a@x.com", "pw")
        assert isinstance(session, ClientSession)
        assert session.role == UserRole.CLIENT
        assert session.email == "a@x.com"

    def test_signup_twice_keeps_one_account(self, storage):
        signup_client(storage, "a@x.com", "pw")
        signup_client(storage, "a@x.com", "other")
        assert [a.email for a in storage.get_accounts()] == ["a@x.com"]

    def test_login_with_stored_account(self, storage):
        signup_client(storage, "a@x.com", "pw")
        assert login_client(storage, "a@x.com", "pw").email == "a@x.com"

    def test_login_with_demo_pair(self, storage):
        session = login_client(storage, settings.demo_client_email, settings.demo_client_password)
        assert session.email == settings.demo_client_email

    def test_wrong_password_rejected(self, storage):
        signup_client(storage, "a@x.com", "pw")
        with pytest.raises(InvalidCredentialsError, match="Invalid client credentials"):
            login_client(storage, "a@x.com", "PW")


class TestDeveloperPolicy:

    def test_admin_pair_accepted(self):
        session = login_developer(settings.admin_email, settings.admin_password)
        assert isinstance(session, DeveloperSession)
        assert session.can_view_portfolio and not session.can_edit

    def test_client_credentials_rejected(self, storage):
        signup_client(storage, "a@x.com", "pw")
        with pytest.raises(InvalidCredentialsError):
            login_developer("a@x.com", "pw")

    def test_demo_client_rejected(self):
        with pytest.raises(InvalidCredentialsError, match="Invalid developer credentials"):
            login_developer(settings.demo_client_email, settings.demo_client_password)


def test_visibility_by_role(storage, project):
    other = project.model_copy(update={"id": "p2", "client_id": "b@x.com"})
    storage.save_project(project)
    storage.save_project(other)

    client = ClientSession("a@x.com")
    developer = DeveloperSession(settings.admin_email)

    assert [p.id for p in client.visible_projects(storage)] == [project.id]
    assert not client.can_view(other)
    assert len(developer.visible_projects(storage)) == 2



def test_role_without_visibility_rules_cannot_open():
    class ReviewerSession(Session):
        role = UserRole.DEVELOPER

        def can_view(self, project):
            return True

    with pytest.raises(TypeError):
        ReviewerSession("r@x.com")


def test_registry_lifecycle():
    registry = SessionRegistry()
    session = registry.open(ClientSession("a@x.com"))

    assert registry.get(session.session_id) is session
    assert registry.get(None) is None

    registry.close(session.session_id)
    assert registry.get(session.session_id) is None
