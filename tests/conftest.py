"""Shared fixtures for the step library unit tests."""

import copy
from types import SimpleNamespace

import pytest

from drupal_extension.config import DEFAULT_PARAMETERS
from drupal_extension.context import DrupalContext
from drupal_extension.randomizer import Random
from drupal_extension.session import SessionAccessor
from tests.fakes import FakeBrowser, FakeElement, RecordingDriver


@pytest.fixture
def parameters():
    params = copy.deepcopy(DEFAULT_PARAMETERS)
    params["base_url"] = "http://drupal.test/"
    return params


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def session(browser, parameters) -> SessionAccessor:
    return SessionAccessor({"default": browser}, parameters)


@pytest.fixture
def driver() -> RecordingDriver:
    return RecordingDriver()


@pytest.fixture
def drupal(session, driver) -> DrupalContext:
    return DrupalContext(session, driver, Random(seed=7))


@pytest.fixture
def context(drupal):
    """Minimal stand-in for the behave context handed to step functions."""
    return SimpleNamespace(drupal=drupal, table=None)


@pytest.fixture
def login_form(browser, parameters):
    """Puts a login form on the fake page; submitting it marks the page as logged in."""
    selector = parameters["selectors"]["logged_in_selector"]
    form = SimpleNamespace(
        username=FakeElement(),
        password=FakeElement(),
        submit=FakeElement(on_click=lambda: browser.on_css(selector, [FakeElement()])),
    )
    browser.on_xpath('"Username"', [form.username])
    browser.on_xpath('"Password"', [form.password])
    browser.on_xpath('"Log in"', [form.submit])
    return form
