"""
Keeps track of the users created during a scenario and of who is logged in.
"""

from drupal_extension.exceptions import DrupalExtensionError


class UserManager(object):
    """ Users by name, plus the current user. None as current user means anonymous. """

    def __init__(self):
        self._users = {}
        self._current_user = None

    def __repr__(self):
        return 'UserManager({}, current={})'.format(sorted(self._users),
                                                    getattr(self._current_user, 'name', None))

    def add_user(self, user):
        self._users[user.name] = user

    def get_user(self, name):
        try:
            return self._users[name]
        except KeyError:
            raise DrupalExtensionError('No user with {} name is registered with the driver.'.format(
                name)) from None

    def get_users(self):
        return list(self._users.values())

    def has_users(self):
        return bool(self._users)

    def clear_users(self):
        self._users = {}
        self._current_user = None

    def get_current_user(self):
        return self._current_user

    def set_current_user(self, user):
        self._current_user = user

    def current_user_is_anonymous(self):
        return self._current_user is None
