""" Exceptions raised by the step library. """


class DrupalExtensionError(Exception):
    """ Base class for every error raised by this package. """


class NotFound(DrupalExtensionError):
    """ A table, row, region or user required by a step does not exist. """


class AssertionFailed(DrupalExtensionError, AssertionError):
    """ A text presence or absence check on the page did not hold. """


class UnsupportedDriverAction(DrupalExtensionError):
    """ The configured driver cannot perform the requested action. """

    def __init__(self, action, driver):
        self.action = action
        self.driver = driver
        super().__init__('No ability to {} using the {} driver.'.format(
            action, type(driver).__name__))
