"""
The interface to whatever creates users, content and configuration on the site under test.
"""

import abc
import logging
import importlib

from drupal_extension.exceptions import DrupalExtensionError, UnsupportedDriverAction


class DrupalDriver(abc.ABC):
    """
    Provisions test fixtures on the Drupal site.

    Entities are plain attribute objects (types.SimpleNamespace). Create methods
    return the saved entity carrying its id: uid for users, nid for nodes, tid for
    terms.
    """

    def __init__(self, parameters=None):
        self.parameters = parameters or {}

    def __repr__(self):
        return '{}()'.format(type(self).__name__)

    @abc.abstractmethod
    def user_create(self, user):
        """ Saves the user and sets user.uid. """

    @abc.abstractmethod
    def user_delete(self, user):
        pass

    @abc.abstractmethod
    def user_add_role(self, user, role):
        pass

    @abc.abstractmethod
    def role_create(self, permissions):
        """ Creates a role with the given permissions and returns its name. """

    @abc.abstractmethod
    def role_delete(self, role):
        pass

    @abc.abstractmethod
    def node_create(self, node):
        pass

    @abc.abstractmethod
    def node_delete(self, node):
        pass

    @abc.abstractmethod
    def term_create(self, term):
        pass

    @abc.abstractmethod
    def term_delete(self, term):
        pass

    @abc.abstractmethod
    def language_create(self, language):
        """ Returns the language, or None when the site already had it. """

    @abc.abstractmethod
    def language_delete(self, language):
        pass

    @abc.abstractmethod
    def clear_cache(self):
        pass

    @abc.abstractmethod
    def run_cron(self):
        pass


class BlackboxDriver(DrupalDriver):
    """ Driver for sites only reachable through the browser. It cannot provision anything. """

    def _unsupported(self, action):
        raise UnsupportedDriverAction(action, self)

    def user_create(self, user):
        self._unsupported('create users')

    def user_delete(self, user):
        self._unsupported('delete users')

    def user_add_role(self, user, role):
        self._unsupported('add roles')

    def role_create(self, permissions):
        self._unsupported('create roles')

    def role_delete(self, role):
        self._unsupported('delete roles')

    def node_create(self, node):
        self._unsupported('create nodes')

    def node_delete(self, node):
        self._unsupported('delete nodes')

    def term_create(self, term):
        self._unsupported('create terms')

    def term_delete(self, term):
        self._unsupported('delete terms')

    def language_create(self, language):
        self._unsupported('create languages')

    def language_delete(self, language):
        self._unsupported('delete languages')

    def clear_cache(self):
        self._unsupported('clear the cache')

    def run_cron(self):
        self._unsupported('run cron')


def load_driver(spec, parameters=None):
    """
    Instantiates the driver named in the configuration.

    Args:
        spec (string): "package.module:ClassName". The blackbox driver when empty.
        parameters (dict): passed to the driver's constructor.
    """

    logger = logging.getLogger('drupal')

    if not spec:
        logger.debug('No driver configured, using the blackbox driver.')
        return BlackboxDriver(parameters)

    module_name, _, class_name = spec.partition(':')
    if not class_name:
        raise DrupalExtensionError(
            'Driver "{}" must be given as package.module:ClassName.'.format(spec))
    try:
        driver_class = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as error:
        raise DrupalExtensionError('Could not load driver "{}": {}'.format(spec, error)) from error

    logger.debug('Using driver %s', spec)
    return driver_class(parameters)
