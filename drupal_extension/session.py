"""
Access to the browser sessions and the Mink parameters of a running scenario.
"""

import os
import uuid
import logging
import datetime
import tempfile

from selenium.webdriver.common.by import By

from drupal_extension.exceptions import DrupalExtensionError, NotFound


class SessionAccessor(object):
    """
    Holds the named browser sessions and the parameter map for one scenario.

    Step definitions receive it explicitly through the Drupal context instead of
    sharing session state between unrelated objects.
    """

    def __init__(self, sessions=None, parameters=None, default_session='default'):
        self._sessions = dict(sessions or {})
        self._parameters = dict(parameters or {})
        self.default_session = default_session

    def __repr__(self):
        return 'SessionAccessor({}, default={})'.format(sorted(self._sessions),
                                                        self.default_session)

    def register_session(self, name, browser):
        """ Adds or replaces the browser known under name. """
        self._sessions[name] = browser

    def sessions(self):
        return sorted(self._sessions)

    def get_session(self, name=None):
        """
        Returns the browser session.

        Args:
            name (string): the session to return. The default session when omitted.
        """

        name = name or self.default_session
        try:
            return self._sessions[name]
        except KeyError:
            raise DrupalExtensionError('Session "{}" is not registered.'.format(name)) from None

    def get_parameters(self):
        return self._parameters

    def set_parameters(self, parameters):
        self._parameters = dict(parameters)

    def get_parameter(self, name):
        return self._parameters.get(name)

    def set_parameter(self, name, value):
        """ Applies the value to this scenario's parameters only. """
        self._parameters[name] = value

    def locate_path(self, path):
        """
        Turns a site relative path into an absolute URL on base_url.

        Args:
            path (string): a path such as "/node/1", or a full URL which is kept as is.
        """

        if path.startswith('http'):
            return path
        start_url = (self.get_parameter('base_url') or '').rstrip('/') + '/'
        return start_url + path.lstrip('/')

    def visit_path(self, path, session_name=None):
        url = self.locate_path(path)
        logging.getLogger('drupal').debug('Visiting %s', url)
        self.get_session(session_name).get(url)

    def current_url(self, session_name=None):
        return self.get_session(session_name).current_url

    def page(self, session_name=None):
        """ The searchable root of the current document. """
        return self.get_session(session_name)

    def save_screenshot(self, filename=None, filepath=None):
        """
        Saves a screenshot of the current window and returns where it was written.

        Args:
            filename (string): defaults to <browser>_<ISO 8601 basic date>_<random id>.png.
            filepath (string): defaults to the screenshot_dir parameter, then the
                system temporary directory.
        """

        if not filename:
            filename = '{}_{}_{}.png'.format(self.get_parameter('browser_name'),
                                             datetime.datetime.now().strftime('%Y%m%dT%H%M%S'),
                                             uuid.uuid4().hex)
        filepath = filepath or self.get_parameter('screenshot_dir') or tempfile.gettempdir()
        os.makedirs(filepath, exist_ok=True)
        destination = os.path.join(filepath, filename)
        with open(destination, 'wb') as outfile:
            outfile.write(self.get_session().get_screenshot_as_png())
        logging.getLogger('drupal').info('Screenshot saved to %s', destination)
        return destination

    def get_region(self, region):
        """
        Returns the element for a region of the current page.

        Args:
            region (string): a name from the region_map parameter.
        """

        selector = (self.get_parameter('region_map') or {}).get(region)
        elements = []
        if selector:
            elements = self.get_session().find_elements(By.CSS_SELECTOR, selector)
        if not elements:
            raise NotFound('No region "{}" found on the page {}.'.format(region,
                                                                       self.current_url()))
        return elements[0]

    def stop(self):
        """ Quits every browser, forgetting them even when quitting fails. """

        logger = logging.getLogger('drupal')
        sessions, self._sessions = self._sessions, {}
        for name, browser in sessions.items():
            logger.debug('Stopping session %s', name)
            browser.quit()
