"""
Behave environment hooks. Call these from features/environment.py.
"""

import os
import logging
import logging.handlers

from drupal_extension.browser import create_browser
from drupal_extension.config import load_parameters, start_logging
from drupal_extension.context import DrupalContext
from drupal_extension.driver import load_driver
from drupal_extension.session import SessionAccessor


def before_all(context, config_path=None, logging_path='logging.yaml'):
    start_logging(logging_path)
    context.mink_parameters = load_parameters(config_path, context.config.userdata)
    context.drupal_driver = load_driver(context.mink_parameters.get('driver'),
                                        context.mink_parameters)
    context.fail_count = 0


def before_feature(context, feature, log_dir='logs'):
    current_feature = os.path.splitext(os.path.basename(feature.filename))[0]

    os.makedirs(log_dir, exist_ok=True)
    log_filename = os.path.join(log_dir, current_feature + '.log')
    logger = logging.getLogger('job')       # pylint: disable=C0103
    context.feature_log_handler = logging.handlers.RotatingFileHandler(
        filename=log_filename, maxBytes=10485760, backupCount=5)
    logformat = logging.Formatter('%(asctime)s %(levelname)s : %(name)s | %(message)s')
    context.feature_log_handler.setFormatter(logformat)
    logger.addHandler(context.feature_log_handler)
    logger.setLevel(logging.DEBUG)

    logger.info('Beginning feature \"%s\".', current_feature)


def before_scenario(context, scenario, browser_factory=create_browser):
    logger = logging.getLogger('job')

    parameters = context.mink_parameters
    browser = browser_factory(parameters.get('browser_name'), parameters.get('headless'))
    session = SessionAccessor({'default': browser}, parameters)
    context.drupal = DrupalContext(session, context.drupal_driver)
    logger.debug('Scenario \"%s\" started with %r.', scenario.name, session)


def after_step(context, step):
    logger = logging.getLogger('job')

    if step.status == 'failed':
        logger.error('Step \"%s\" has failed with error: %s', step.name, step.error_message)
        if context.mink_parameters.get('screenshot_on_failure'):
            context.drupal.session.save_screenshot()
    else:
        logger.info('Step \"%s\" finished with status %s in %.3f seconds.',
                    step.name, step.status, step.duration)


def after_scenario(context, scenario):
    drupal = getattr(context, 'drupal', None)
    if drupal is None:
        logging.getLogger('job').error('Scenario \"%s\" was never set up.', scenario.name)
        return
    try:
        drupal.clean_up()
    finally:
        drupal.session.stop()


def after_feature(context, feature):
    logger = logging.getLogger('job')

    if feature.status == 'failed':
        logger.error('Feature \"%s\" has failed.', feature.name)
        context.fail_count += 1
    logger.info('Feature \"%s\" took %.3f seconds to complete.', feature.name, feature.duration)
    logger.removeHandler(context.feature_log_handler)
    context.feature_log_handler.close()


def after_all(context):
    logger = logging.getLogger('job')

    if context.fail_count:
        logger.error('%d feature(s) failed.', context.fail_count)
