"""Unit tests for the user manager and random names."""

from types import SimpleNamespace

import pytest

from drupal_extension.exceptions import DrupalExtensionError
from drupal_extension.randomizer import Random
from drupal_extension.users import UserManager


def test_user_manager_tracks_users_and_current_user():
    manager = UserManager()
    joe = SimpleNamespace(name="joe")

    assert manager.current_user_is_anonymous()
    assert not manager.has_users()

    manager.add_user(joe)
    manager.set_current_user(joe)

    assert manager.get_user("joe") is joe
    assert manager.get_users() == [joe]
    assert manager.get_current_user() is joe
    assert not manager.current_user_is_anonymous()

    manager.clear_users()

    assert not manager.has_users()
    assert manager.current_user_is_anonymous()


def test_unknown_user():
    with pytest.raises(DrupalExtensionError, match="No user with ann name"):
        UserManager().get_user("ann")


def test_random_names():
    random = Random(seed=3)

    names = [random.name(8) for _ in range(50)]

    assert all(len(name) == 8 and name[0].isalpha() and name.isalnum() for name in names)
    assert len(set(names)) == 50
    assert len(random.name(255)) == 255


def test_random_name_length_must_be_positive():
    with pytest.raises(ValueError):
        Random().name(0)
