"""Webhooks, quality gates, users and groups against a running server."""

import pytest

from helpers import ignore_not_found, retry, unique_name
from sonar_client.services.qualitygates import (
    QualitygatesCreateConditionOption,
    QualitygatesNameOption,
    QualitygatesShowOption,
)
from sonar_client.services.user_groups import (
    UserGroupsCreateOption,
    UserGroupsMemberOption,
    UserGroupsNameOption,
    UserGroupsUsersOption,
)
from sonar_client.services.user_tokens import (
    UserTokensGenerateOption,
    UserTokensRevokeOption,
    UserTokensSearchOption,
)
from sonar_client.services.users import UsersCreateOption, UsersDeactivateOption
from sonar_client.services.webhooks import (
    WebhooksCreateOption,
    WebhooksDeleteOption,
    WebhooksUpdateOption,
)


# ---------------------------------------------------------------------------
# Webhooks
# ---------------------------------------------------------------------------

def test_webhook_lifecycle(live_client, cleanup):
    name = unique_name("hook")
    webhook = live_client.webhooks.create(WebhooksCreateOption(
        name=name, url="https://ci.example.com/hook", secret="0123456789abcdef",
    ))["webhook"]
    cleanup.register("webhook", webhook["key"], lambda: ignore_not_found(
        live_client.webhooks.delete, WebhooksDeleteOption(webhook=webhook["key"]),
    ))
    assert webhook["hasSecret"] is True

    live_client.webhooks.update(WebhooksUpdateOption(
        webhook=webhook["key"], name=name, url="https://ci.example.com/hook", secret="",
    ))
    listed = {w["key"]: w for w in live_client.webhooks.list()["webhooks"]}
    assert listed[webhook["key"]]["hasSecret"] is False


# ---------------------------------------------------------------------------
# Quality gates
# ---------------------------------------------------------------------------

def test_quality_gate_with_condition(live_client, cleanup):
    name = unique_name("gate")
    live_client.qualitygates.create(QualitygatesNameOption(name=name))
    cleanup.register("quality gate", name, lambda: ignore_not_found(
        live_client.qualitygates.destroy, QualitygatesNameOption(name=name),
    ))

    condition = live_client.qualitygates.create_condition(QualitygatesCreateConditionOption(
        gate_name=name, metric="coverage", op="LT", error="80",
    ))
    gate = live_client.qualitygates.show(QualitygatesShowOption(name=name))
    assert condition["id"] in {c["id"] for c in gate["conditions"]}


# ---------------------------------------------------------------------------
# Users, groups and tokens
# ---------------------------------------------------------------------------

@pytest.fixture
def user(live_client, cleanup):
    login = unique_name("user")
    live_client.users.create(UsersCreateOption(login=login, name=login, password="e2e-Password-123!"))
    cleanup.register("user", login, lambda: ignore_not_found(
        live_client.users.deactivate, UsersDeactivateOption(login=login),
    ))
    return login


def test_group_membership(live_client, cleanup, user):
    group = unique_name("group")
    live_client.user_groups.create(UserGroupsCreateOption(name=group, description="e2e"))
    cleanup.register("group", group, lambda: ignore_not_found(
        live_client.user_groups.delete, UserGroupsNameOption(name=group),
    ))

    live_client.user_groups.add_user(UserGroupsMemberOption(name=group, login=user))

    def members():
        return {u["login"] for u in live_client.user_groups.users(UserGroupsUsersOption(name=group))["users"]}

    assert user in retry(members)


def test_token_lifecycle(live_client, user):
    name = unique_name("token")
    token = live_client.user_tokens.generate(UserTokensGenerateOption(name=name, login=user))
    assert token["token"]

    tokens = live_client.user_tokens.search(UserTokensSearchOption(login=user))["userTokens"]
    assert name in {t["name"] for t in tokens}

    live_client.user_tokens.revoke(UserTokensRevokeOption(name=name, login=user))
    tokens = live_client.user_tokens.search(UserTokensSearchOption(login=user))["userTokens"]
    assert name not in {t["name"] for t in tokens}
