""" step definitions for Drupal sites """

# pylint: disable=W0401, W0614

from drupal_extension.steps import *    # noqa: F401,F403
