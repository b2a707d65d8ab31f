"""
Creates the Selenium webdriver used as the browser session.
"""

import logging
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions


CHROME_ARGUMENTS = (
    '--disable-extensions',
    'test-type',
    '--enable-automation',
    '--js-flags=--expose-gc',
    '--disable-popup-blocking',
    '--disable-default-apps',
    'test-type=browser',
    'disable-infobars',
)


def create_browser(name='chrome', headless=True):
    """
    Starts a webdriver for the named browser.

    Args:
        name (string): "firefox" or "chrome". Anything else falls back to chrome.
        headless (bool): run without a visible window.
    """

    logger = logging.getLogger('drupal')

    if (name or '').lower() == 'firefox':
        firefox_options = FirefoxOptions()
        if headless:
            firefox_options.add_argument('-headless')
        browser = webdriver.Firefox(options=firefox_options)
        logger.debug('Firefox webdriver will be used.')

    else:
        chrome_options = ChromeOptions()
        for argument in CHROME_ARGUMENTS:
            chrome_options.add_argument(argument)
        if headless:
            chrome_options.add_argument('--headless=new')

        chrome_args = ', '.join(chrome_options.arguments)
        logger.debug('Chrome webdriver will be used with arguments: %s', chrome_args)
        browser = webdriver.Chrome(options=chrome_options)

    browser.maximize_window()
    return browser
