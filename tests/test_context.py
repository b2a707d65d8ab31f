"""Unit tests for the per scenario Drupal context."""

from types import SimpleNamespace

import pytest

from drupal_extension.exceptions import DrupalExtensionError, NotFound
from tests.fakes import FakeElement


def test_new_user_has_generated_credentials(drupal):
    user = drupal.new_user(role="editor", field_name="Joe")

    assert len(user.name) == 8
    assert len(user.password) == 16
    assert user.mail == f"{user.name}@example.com"
    assert user.role == "editor"
    assert user.field_name == "Joe"


def test_user_create_registers_user(drupal, driver):
    user = drupal.user_create(SimpleNamespace(name="joe", password="secret"))

    assert user.uid == 1
    assert drupal.users.get_user("joe") is user
    assert driver.calls == [("user_create", "joe")]


def test_user_add_roles_skips_authenticated(drupal, driver):
    user = SimpleNamespace(name="joe")

    drupal.user_add_roles(user, "editor, Authenticated User,authenticated, reviewer")

    assert driver.calls == [("user_add_role", "joe", "editor"), ("user_add_role", "joe", "reviewer")]


def test_node_author_becomes_uid(drupal):
    joe = drupal.user_create(SimpleNamespace(name="joe", password="x"))

    saved = drupal.node_create(SimpleNamespace(title="Hello", type="article", author="joe"))

    assert saved.uid == joe.uid
    assert drupal.nodes == [saved]


def test_node_with_unknown_author(drupal, driver):
    with pytest.raises(DrupalExtensionError):
        drupal.node_create(SimpleNamespace(title="Hello", author="nobody"))
    assert driver.calls == []


def test_existing_language_is_not_tracked(drupal):
    assert drupal.language_create(SimpleNamespace(langcode="en")) is None
    fr = drupal.language_create(SimpleNamespace(langcode="fr"))

    assert drupal.languages == {"fr": fr}


def test_login_fills_and_submits_form(drupal, browser, login_form):
    user = SimpleNamespace(name="joe", password="secret")

    drupal.login(user)

    assert browser.visited == ["http://drupal.test/user/login"]
    assert login_form.username.keys == ["joe"]
    assert login_form.password.keys == ["secret"]
    assert login_form.submit.clicks == 1
    assert drupal.users.get_current_user() is user
    assert drupal.logged_in()


def test_login_logs_previous_user_out(drupal, browser, login_form):
    drupal.login(SimpleNamespace(name="joe", password="secret"))

    drupal.login(SimpleNamespace(name="ann", password="secret"))

    assert browser.visited == [
        "http://drupal.test/user/login",
        "http://drupal.test/user/logout",
        "http://drupal.test/user/login",
    ]
    assert drupal.users.get_current_user().name == "ann"


def test_login_that_does_not_stick(drupal, browser, login_form):
    login_form.submit.on_click = None

    with pytest.raises(DrupalExtensionError, match='for user "joe"'):
        drupal.login(SimpleNamespace(name="joe", password="wrong"))
    assert drupal.users.current_user_is_anonymous()


def test_login_without_form(drupal, browser):
    with pytest.raises(NotFound, match='No form field "Username"'):
        drupal.login(SimpleNamespace(name="joe", password="secret"))


def test_logged_in_falls_back_to_log_out_link(drupal, browser):
    assert not drupal.logged_in()

    browser.on_xpath('"Log out"', [FakeElement("Log out")])

    assert drupal.logged_in()


def test_logged_in_with_role(drupal, login_form):
    user = SimpleNamespace(name="joe", password="secret", role="editor")
    assert not drupal.logged_in_with_role("editor")

    drupal.login(user)

    assert drupal.logged_in_with_role("editor")
    assert not drupal.logged_in_with_role("administrator")


def test_fast_logout_drops_cookies(drupal, browser):
    drupal.users.set_current_user(SimpleNamespace(name="joe"))

    drupal.logout(fast=True)

    assert browser.cookies_deleted == 1
    assert browser.visited == []
    assert drupal.users.current_user_is_anonymous()


def test_logout_confirms_when_asked(drupal, browser):
    confirm = FakeElement("Log out")
    browser.on_xpath('"Log out"', [confirm])

    drupal.logout()

    assert browser.visited == ["http://drupal.test/user/logout"]
    assert confirm.clicks == 1


def test_clean_up_removes_fixtures_in_order(drupal, driver, browser):
    drupal.user_create(SimpleNamespace(name="joe", password="x"))
    drupal.node_create(SimpleNamespace(title="Hello"))
    drupal.term_create(SimpleNamespace(name="Fish"))
    role = drupal.role_create(["access content"])
    drupal.language_create(SimpleNamespace(langcode="fr"))
    driver.calls = []

    drupal.clean_up()

    assert driver.actions() == [
        "node_delete",
        "user_delete",
        "term_delete",
        "role_delete",
        "language_delete",
    ]
    assert ("role_delete", role) in driver.calls
    assert browser.cookies_deleted == 1
    assert not drupal.users.has_users()
    assert (drupal.nodes, drupal.terms, drupal.roles, drupal.languages) == ([], [], [], {})


def test_clean_up_without_fixtures(drupal, driver, browser):
    drupal.clean_up()

    assert driver.calls == []
    assert browser.cookies_deleted == 0


def test_clean_up_continues_after_failed_deletion(drupal, driver, monkeypatch):
    def broken_node_delete(node):
        raise DrupalExtensionError("node service unavailable")

    monkeypatch.setattr(driver, "node_delete", broken_node_delete)
    drupal.user_create(SimpleNamespace(name="joe", password="x"))
    drupal.node_create(SimpleNamespace(title="Hello"))
    drupal.term_create(SimpleNamespace(name="Fish"))
    role = drupal.role_create(["access content"])
    drupal.language_create(SimpleNamespace(langcode="fr"))
    driver.calls = []

    with pytest.raises(DrupalExtensionError, match="node service unavailable"):
        drupal.clean_up()

    assert driver.calls == [
        ("user_delete", "joe"),
        ("term_delete", 3),
        ("role_delete", role),
        ("language_delete", "fr"),
    ]
    assert not drupal.users.has_users()
    assert (drupal.nodes, drupal.terms, drupal.roles, drupal.languages) == ([], [], [], {})
