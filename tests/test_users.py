"""Tests for the user services: users, user_groups and user_tokens."""

import pytest

from sonar_client.services.user_groups import (
    UserGroupsCreateOption,
    UserGroupsMemberOption,
    UserGroupsSearchOption,
    UserGroupsUpdateOption,
    UserGroupsUsersOption,
)
from sonar_client.services.user_tokens import (
    UserTokensGenerateOption,
    UserTokensRevokeOption,
    UserTokensSearchOption,
)
from sonar_client.services.users import (
    UsersChangePasswordOption,
    UsersCreateOption,
    UsersDeactivateOption,
    UsersDismissNoticeOption,
    UsersGroupsOption,
    UsersSearchOption,
    UsersSetHomepageOption,
    UsersUpdateLoginOption,
    UsersUpdateOption,
)
from sonar_client.validation import (
    InvalidFormatError,
    InvalidValueError,
    MissingRequiredError,
    OutOfRangeError,
)

from support import BASE, form, form_lists, query


# ---------------------------------------------------------------------------
# users
# ---------------------------------------------------------------------------

def test_create_local_user(client, requests_mock):
    adapter = requests_mock.post(
        f"{BASE}/api/users/create",
        json={"user": {"login": "bob", "name": "Bob", "active": True, "local": True}},
    )
    data = client.users.create(UsersCreateOption(
        login="bob", name="Bob", email="bob@example.com", password="correct-horse-battery",
        scm_accounts=["bob", "bob@example.com"],
    ))
    assert data["user"]["login"] == "bob"
    assert form_lists(adapter.last_request) == {
        "login": ["bob"],
        "name": ["Bob"],
        "email": ["bob@example.com"],
        "password": ["correct-horse-battery"],
        "scmAccount": ["bob", "bob@example.com"],
    }


def test_create_external_user_without_password(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/create", json={"user": {"login": "ext"}})
    client.users.create(UsersCreateOption(login="ext", name="External", local=False))
    assert form(adapter.last_request) == {"login": "ext", "name": "External", "local": "false"}


def test_create_local_user_requires_password(client):
    with pytest.raises(MissingRequiredError) as info:
        client.users.create(UsersCreateOption(login="bob", name="Bob"))
    assert info.value.field == "password"


@pytest.mark.parametrize("opt, field", [
    (UsersCreateOption(login="b", name="Bob", password="p" * 12), "login"),
    (UsersCreateOption(login="bob", name="Bob", password="short"), "password"),
    (UsersCreateOption(login="bob", name="n" * 201, password="p" * 12), "name"),
    (UsersCreateOption(login="bob", name="Bob", email="e" * 101, password="p" * 12), "email"),
])
def test_create_lengths(client, opt, field):
    with pytest.raises(OutOfRangeError) as info:
        client.users.create(opt)
    assert info.value.field == field


def test_update_repeats_scm_account(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/update", json={"user": {"login": "bob"}})
    client.users.update(UsersUpdateOption(login="bob", scm_accounts=["a", "b"]))
    assert form_lists(adapter.last_request) == {"login": ["bob"], "scmAccount": ["a", "b"]}


def test_change_password(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/change_password", status_code=204)
    client.users.change_password(UsersChangePasswordOption(
        login="bob", password="new-password-123", previous_password="old-password-123",
    ))
    assert form(adapter.last_request) == {
        "login": "bob", "password": "new-password-123", "previousPassword": "old-password-123",
    }

    with pytest.raises(OutOfRangeError):
        client.users.change_password(UsersChangePasswordOption(login="bob", password="short"))


def test_deactivate_with_anonymize(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/deactivate", json={"user": {"login": "bob", "active": False}})
    data = client.users.deactivate(UsersDeactivateOption(login="bob", anonymize=True))
    assert data["user"]["active"] is False
    assert form(adapter.last_request) == {"login": "bob", "anonymize": "true"}


def test_current(client, requests_mock):
    requests_mock.get(
        f"{BASE}/api/users/current",
        json={"isLoggedIn": True, "login": "admin", "permissions": {"global": ["admin"]}},
    )
    assert client.users.current()["permissions"]["global"] == ["admin"]


def test_dismiss_notice(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/dismiss_notice", status_code=204)
    client.users.dismiss_notice(UsersDismissNoticeOption(notice="sonarlintAd"))
    assert form(adapter.last_request) == {"notice": "sonarlintAd"}

    with pytest.raises(InvalidValueError):
        client.users.dismiss_notice(UsersDismissNoticeOption(notice="welcome"))


def test_groups_of_user(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/users/groups", json={"groups": [], "paging": {"total": 0}})
    client.users.groups(UsersGroupsOption(login="bob", selected="all", query="dev"))
    assert query(adapter.last_request) == {"login": "bob", "selected": "all", "q": "dev"}

    with pytest.raises(InvalidValueError):
        client.users.groups(UsersGroupsOption(login="bob", selected="some"))


def test_search(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/users/search", json={"users": [], "paging": {"total": 0}})
    client.users.search(UsersSearchOption(deactivated=False, last_connected_after="2024-01-01", page_size=50))
    assert query(adapter.last_request) == {
        "deactivated": "false", "lastConnectedAfter": "2024-01-01", "ps": "50",
    }


def test_search_bad_date(client):
    with pytest.raises(InvalidFormatError):
        client.users.search(UsersSearchOption(sl_last_connected_before="yesterday"))


def test_set_homepage(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/set_homepage", status_code=204)
    client.users.set_homepage(UsersSetHomepageOption(type="PROJECT", component="my-app", branch="main"))
    assert form(adapter.last_request) == {"type": "PROJECT", "component": "my-app", "branch": "main"}

    with pytest.raises(InvalidValueError):
        client.users.set_homepage(UsersSetHomepageOption(type="DASHBOARD"))


def test_update_login(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/users/update_login", status_code=204)
    client.users.update_login(UsersUpdateLoginOption(login="bob", new_login="robert"))
    assert form(adapter.last_request) == {"login": "bob", "newLogin": "robert"}

    with pytest.raises(MissingRequiredError):
        client.users.update_login(UsersUpdateLoginOption(login="bob"))


def test_identity_providers(client, requests_mock):
    requests_mock.get(f"{BASE}/api/users/identity_providers", json={"identityProviders": [{"key": "github"}]})
    assert client.users.identity_providers()["identityProviders"][0]["key"] == "github"


# ---------------------------------------------------------------------------
# user_groups
# ---------------------------------------------------------------------------

def test_group_create(client, requests_mock):
    adapter = requests_mock.post(
        f"{BASE}/api/user_groups/create",
        json={"group": {"id": "G1", "name": "devs", "membersCount": 0}},
    )
    data = client.user_groups.create(UserGroupsCreateOption(name="devs", description="Developers"))
    assert data["group"]["name"] == "devs"
    assert form(adapter.last_request) == {"name": "devs", "description": "Developers"}


def test_group_create_lengths(client):
    with pytest.raises(OutOfRangeError):
        client.user_groups.create(UserGroupsCreateOption(name="g" * 256))
    with pytest.raises(OutOfRangeError):
        client.user_groups.create(UserGroupsCreateOption(name="devs", description="d" * 201))


def test_group_membership(client, requests_mock):
    add = requests_mock.post(f"{BASE}/api/user_groups/add_user", status_code=204)
    remove = requests_mock.post(f"{BASE}/api/user_groups/remove_user", status_code=204)
    client.user_groups.add_user(UserGroupsMemberOption(name="devs", login="bob"))
    client.user_groups.remove_user(UserGroupsMemberOption(name="devs", login="bob"))
    assert form(add.last_request) == {"name": "devs", "login": "bob"}
    assert form(remove.last_request) == {"name": "devs", "login": "bob"}


def test_group_update_requires_current_name(client):
    with pytest.raises(MissingRequiredError) as info:
        client.user_groups.update(UserGroupsUpdateOption(name="developers"))
    assert info.value.field == "current_name"


def test_group_search(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/user_groups/search", json={"groups": [], "paging": {"total": 0}})
    client.user_groups.search()
    assert query(adapter.last_request) == {}
    client.user_groups.search(UserGroupsSearchOption(fields=["name", "membersCount"], managed=False))
    assert query(adapter.last_request) == {"f": "name,membersCount", "managed": "false"}

    with pytest.raises(InvalidValueError):
        client.user_groups.search(UserGroupsSearchOption(fields=["id"]))


def test_group_users_requires_name(client):
    with pytest.raises(MissingRequiredError):
        client.user_groups.users(UserGroupsUsersOption(selected="all"))


# ---------------------------------------------------------------------------
# user_tokens
# ---------------------------------------------------------------------------

def test_generate_token(client, requests_mock):
    adapter = requests_mock.post(
        f"{BASE}/api/user_tokens/generate",
        json={"login": "bob", "name": "ci", "token": "squ_secret", "type": "USER_TOKEN"},
    )
    data = client.user_tokens.generate(UserTokensGenerateOption(
        name="ci", login="bob", type="USER_TOKEN", expiration_date="2030-01-01",
    ))
    assert data["token"] == "squ_secret"
    assert form(adapter.last_request) == {
        "name": "ci", "login": "bob", "type": "USER_TOKEN", "expirationDate": "2030-01-01",
    }


def test_generate_project_token_requires_project(client):
    with pytest.raises(MissingRequiredError) as info:
        client.user_tokens.generate(UserTokensGenerateOption(name="ci", type="PROJECT_ANALYSIS_TOKEN"))
    assert info.value.field == "project_key"


@pytest.mark.parametrize("opt, error", [
    (UserTokensGenerateOption(name="t" * 101), OutOfRangeError),
    (UserTokensGenerateOption(name="ci", type="ADMIN_TOKEN"), InvalidValueError),
    (UserTokensGenerateOption(name="ci", expiration_date="2030/01/01"), InvalidFormatError),
])
def test_generate_validation(client, opt, error):
    with pytest.raises(error):
        client.user_tokens.generate(opt)


def test_revoke(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/user_tokens/revoke", status_code=204)
    client.user_tokens.revoke(UserTokensRevokeOption(name="ci"))
    assert form(adapter.last_request) == {"name": "ci"}


def test_search_tokens(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/user_tokens/search", json={"login": "bob", "userTokens": []})
    assert client.user_tokens.search(UserTokensSearchOption(login="bob"))["login"] == "bob"
    assert query(adapter.last_request) == {"login": "bob"}
