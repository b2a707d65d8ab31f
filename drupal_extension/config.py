"""
Loads the Mink parameters and the logging configuration from YAML files and behave userdata.
"""

import os
import copy
import logging
import logging.config
import yaml


CONFIG_FILENAME = 'drupal_extension.yaml'

DEFAULT_PARAMETERS = {
    'base_url': 'http://localhost',
    'browser_name': 'chrome',
    'headless': True,
    'driver': '',
    'screenshot_dir': None,
    'screenshot_on_failure': False,
    'region_map': {},
    'selectors': {
        'logged_in_selector': 'body.logged-in,body.user-logged-in',
        'node_edit_form': 'form.node-form',
    },
    'text': {
        'username_field': 'Username',
        'password_field': 'Password',
        'log_in': 'Log in',
        'log_out': 'Log out',
    },
}

# userdata arrives as strings from the command line
BOOLEAN_PARAMETERS = ('headless', 'screenshot_on_failure')


def start_logging(path='logging.yaml'):
    """
    Initializes all logging from logging.yaml, or a basic console setup when the file is missing.

    Args:
        path (string): location of the dictConfig style YAML file.
    """

    if os.path.exists(path):
        with open(path) as logging_file:
            logging_config = yaml.safe_load(logging_file)
        logging.config.dictConfig(logging_config)
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(asctime)s %(levelname)s : %(name)s | %(message)s')
    logger = logging.getLogger('drupal')
    logger.debug('Logging initialized.')


def find_file(filename, start_path):
    """
    Looks for a file with exact name of filename and returns its absolute path.

    Args:
        filename (string): the file name that will be searched for.
        start_path (string): where the search will begin.
    """

    for root, dirs, files in os.walk(start_path):           # pylint: disable=W0612
        if filename in files:
            return os.path.join(root, filename)
    return None


def to_bool(value):
    """ Interprets yes/no style strings given with -D on the command line. """

    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def merge_parameters(base, overrides):
    """
    Returns a copy of base updated with overrides; nested mappings are merged key by key.

    Args:
        base (dict): parameters to start from.
        overrides (dict): parameters that take precedence.
    """

    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_parameters(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_parameters(path=None, userdata=None):
    """
    Builds the Mink parameter map: defaults, then the YAML file, then behave userdata.

    Args:
        path (string): YAML file with a top level "parameters" mapping. Searched for
            under the working directory when omitted.
        userdata (dict): values passed to behave with -D.
    """

    logger = logging.getLogger('drupal')

    if path is None:
        path = find_file(CONFIG_FILENAME, os.getcwd())

    parameters = copy.deepcopy(DEFAULT_PARAMETERS)
    if path and os.path.exists(path):
        with open(path) as conf_file:
            file_conf = yaml.safe_load(conf_file) or {}
        parameters = merge_parameters(parameters, file_conf.get('parameters', {}))
        logger.debug('Loaded parameters from %s', path)
    else:
        logger.debug('No %s found, using default parameters.', CONFIG_FILENAME)

    parameters = merge_parameters(parameters, dict(userdata or {}))
    for name in BOOLEAN_PARAMETERS:
        parameters[name] = to_bool(parameters.get(name))
    return parameters
