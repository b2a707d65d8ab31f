"""
The per scenario object that step definitions work through.
"""

import logging
from types import SimpleNamespace

from selenium.webdriver.common.by import By

from drupal_extension.exceptions import DrupalExtensionError, NotFound
from drupal_extension.randomizer import Random
from drupal_extension.rows import RowMatcher, xpath_literal
from drupal_extension.users import UserManager


AUTHENTICATED_ROLES = ('authenticated', 'authenticated user')

FIELD_XPATH = ('//input[@id={0} or @name={0} or @placeholder={0}'
               ' or @id=//label[starts-with(normalize-space(string(.)), {0})]/@for]')

BUTTON_XPATH = ('//input[(@type="submit" or @type="button") and (@value={0} or @id={0})]'
                ' | //button[normalize-space(string(.))={0} or @id={0}]')


def split_list(value):
    """ Splits a comma separated step argument, dropping blanks. """
    return [item.strip() for item in value.split(',') if item.strip()]


class DrupalContext(object):
    """
    Gives step definitions the browser, the table row helpers, the driver and the
    users of the current scenario, and removes what the scenario created afterwards.

    Args:
        session (SessionAccessor): browser sessions and parameters.
        driver (DrupalDriver): creates fixtures on the site.
        random (Random): name generator.
        users (UserManager): users created in this scenario.
    """

    def __init__(self, session, driver, random=None, users=None):
        self.session = session
        self.driver = driver
        self.rows = RowMatcher(session)
        self.random = random or Random()
        self.users = users or UserManager()
        self.nodes = []
        self.terms = []
        self.roles = []
        self.languages = {}

    def __repr__(self):
        return 'DrupalContext({!r}, {!r})'.format(self.session, self.driver)

    def _selector(self, name):
        return (self.session.get_parameter('selectors') or {}).get(name)

    def _text(self, name):
        return (self.session.get_parameter('text') or {}).get(name)

    # fixtures

    def new_user(self, **fields):
        """ Returns an unsaved user with a random name, password and mail, updated with fields. """

        name = self.random.name(8)
        user = SimpleNamespace(name=name, password=self.random.name(16),
                               mail='{}@example.com'.format(name))
        for field, value in fields.items():
            setattr(user, field, value)
        return user

    def user_create(self, user):
        logger = logging.getLogger('drupal')
        self.driver.user_create(user)
        self.users.add_user(user)
        logger.info('Created user %s', user.name)
        return user

    def user_add_roles(self, user, roles):
        """ Assigns each role except the authenticated role, which every user already has. """

        for role in split_list(roles):
            if role.lower() not in AUTHENTICATED_ROLES:
                self.driver.user_add_role(user, role)

    def role_create(self, permissions):
        role = self.driver.role_create(permissions)
        self.roles.append(role)
        return role

    def node_create(self, node):
        """ Saves the node. An author field is replaced by that user's uid. """

        logger = logging.getLogger('drupal')
        author = getattr(node, 'author', None)
        if author:
            node.uid = self.users.get_user(author).uid
        saved = self.driver.node_create(node)
        self.nodes.append(saved)
        logger.info('Created %s node "%s"', getattr(node, 'type', ''), getattr(node, 'title', ''))
        return saved

    def term_create(self, term):
        saved = self.driver.term_create(term)
        self.terms.append(saved)
        return saved

    def language_create(self, language):
        created = self.driver.language_create(language)
        if created:
            self.languages[created.langcode] = created
        return created

    # authentication

    def _find_field(self, *locators):
        browser = self.session.get_session()
        for locator in locators:
            fields = browser.find_elements(By.XPATH, FIELD_XPATH.format(xpath_literal(locator)))
            if fields:
                return fields[0]
        raise NotFound('No form field "{}" found on the page {}'.format(
            locators[0], self.session.current_url()))

    def _press_button(self, *locators):
        browser = self.session.get_session()
        for locator in locators:
            buttons = browser.find_elements(By.XPATH, BUTTON_XPATH.format(xpath_literal(locator)))
            if buttons:
                buttons[0].click()
                return
        raise NotFound('No button "{}" found on the page {}'.format(
            locators[0], self.session.current_url()))

    def logged_in(self):
        """ True if the page shows the logged in marker or a log out link. """

        browser = self.session.get_session()
        selector = self._selector('logged_in_selector')
        if selector and browser.find_elements(By.CSS_SELECTOR, selector):
            return True
        return self.rows.find_link(browser, self._text('log_out')) is not None

    def logged_in_with_role(self, role):
        user = self.users.get_current_user()
        return (user is not None and getattr(user, 'role', None) == role
                and self.logged_in())

    def login(self, user):
        """
        Logs the user in through the login form.

        Args:
            user (SimpleNamespace): needs name and password.

        Raises:
            DrupalExtensionError: the page does not look logged in afterwards.
        """

        logger = logging.getLogger('drupal')

        if not self.users.current_user_is_anonymous() or self.logged_in():
            self.logout()

        self.session.visit_path('/user/login')
        username = self._find_field(self._text('username_field'), 'edit-name', 'name')
        username.clear()
        username.send_keys(user.name)
        password = self._find_field(self._text('password_field'), 'edit-pass', 'pass')
        password.clear()
        password.send_keys(user.password)
        self._press_button(self._text('log_in'), 'edit-submit')

        if not self.logged_in():
            raise DrupalExtensionError(
                'Unable to determine if logged in because "{}" link cannot be found'
                ' for user "{}" on the page {}'.format(self._text('log_out'), user.name,
                                                      self.session.current_url()))
        self.users.set_current_user(user)
        logger.info('Logged in as %s', user.name)

    def logout(self, fast=False):
        """
        Logs the current user out.

        Args:
            fast (bool): drop the browser cookies instead of going through the log out page.
        """

        logger = logging.getLogger('drupal')

        if fast:
            self.session.get_session().delete_all_cookies()
        else:
            self.session.visit_path('/user/logout')
            # newer Drupal versions ask for confirmation
            browser = self.session.get_session()
            confirm = browser.find_elements(
                By.XPATH, BUTTON_XPATH.format(xpath_literal(self._text('log_out'))))
            if confirm:
                confirm[0].click()
        self.users.set_current_user(None)
        logger.info('Logged out')

    # clean up

    def _delete_all(self, delete, entities, errors):
        logger = logging.getLogger('drupal')
        for entity in entities:
            try:
                delete(entity)
            except Exception as error:      # pylint: disable=W0703
                logger.error('Could not delete %r: %s', entity, error)
                errors.append(error)

    def clean_up(self):
        """
        Deletes nodes, users, terms, roles and languages created during the scenario.

        A failing deletion does not stop the others. The first error is raised once
        everything has been attempted.
        """

        logger = logging.getLogger('drupal')
        errors = []

        nodes, self.nodes = self.nodes, []
        self._delete_all(self.driver.node_delete, nodes, errors)

        if self.users.has_users():
            users = self.users.get_users()
            self.users.clear_users()
            try:
                self.logout(fast=True)
            except Exception as error:      # pylint: disable=W0703
                logger.error('Could not log out before deleting users: %s', error)
                errors.append(error)
            self._delete_all(self.driver.user_delete, users, errors)

        terms, self.terms = self.terms, []
        self._delete_all(self.driver.term_delete, terms, errors)

        roles, self.roles = self.roles, []
        self._delete_all(self.driver.role_delete, roles, errors)

        languages, self.languages = self.languages, {}
        self._delete_all(self.driver.language_delete, languages.values(), errors)

        if errors:
            raise errors[0]
        logger.debug('Scenario fixtures removed.')
