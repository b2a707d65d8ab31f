"""
Finds table rows by the text they contain and checks text inside those rows.
"""

from selenium.webdriver.common.by import By

from drupal_extension.exceptions import AssertionFailed, NotFound


ROW_SELECTOR = 'tr'

LINK_XPATH = ('.//a[@href][@id={0} or contains(normalize-space(string(.)), {0})'
              ' or contains(@title, {0}) or .//img[contains(@alt, {0})]]')


def xpath_literal(value):
    """ Quotes value for use inside an XPath expression. """

    if '"' not in value:
        return '"{}"'.format(value)
    if "'" not in value:
        return "'{}'".format(value)
    parts = ['"{}"'.format(part) for part in value.split('"')]
    return 'concat({})'.format(', \'"\', '.join(parts))


def contains(row, search):
    return search in row.text


class RowMatcher(object):
    """
    Scans the rows of a table for the ones containing a piece of text.

    Any element with find_elements() can be searched: the whole page, a region
    or a single table. Rows come back in document order.
    """

    def __init__(self, session):
        self.session = session

    def _rows(self, element):
        return element.find_elements(By.CSS_SELECTOR, ROW_SELECTOR)

    def _no_rows(self):
        return NotFound('No rows found on the page {}'.format(self.session.current_url()))

    def _no_match(self, search):
        return NotFound('Failed to find a row containing "{}" on the page {}'.format(
            search, self.session.current_url()))

    def has_table(self, element):
        """ True if the element has at least one table row. """
        return bool(self._rows(element))

    def has_table_rows(self, element, search):
        """ True if at least one table row of the element contains search. """
        return any(contains(row, search) for row in self._rows(element))

    def get_table_rows(self, element, search):
        """
        Returns every row containing search, in document order.

        Args:
            element (WebElement): the page, or part of it, holding the table.
            search (string): case sensitive text the rows must contain.

        Raises:
            NotFound: there are no rows at all, or none of them contains search.
        """

        rows = self._rows(element)
        if not rows:
            raise self._no_rows()
        matches = [row for row in rows if contains(row, search)]
        if not matches:
            raise self._no_match(search)
        return matches

    def get_table_row(self, element, search):
        """ Returns the first row containing search. Raises NotFound like get_table_rows. """

        rows = self._rows(element)
        if not rows:
            raise self._no_rows()
        for row in rows:
            if contains(row, search):
                return row
        raise self._no_match(search)

    def find_link(self, element, locator):
        """ Returns the first link below element matching locator by id, text, title or image alt. """

        links = element.find_elements(By.XPATH, LINK_XPATH.format(xpath_literal(locator)))
        return links[0] if links else None

    def _failure(self, message, row_text, text):
        return AssertionFailed('{} on the page {}'.format(
            message.format(row_text, text), self.session.current_url()))

    def _lacks(self, row_text, text):
        return self._failure('Found a row containing "{}", but it did not contain the text "{}"',
                             row_text, text)

    def _has(self, row_text, text):
        return self._failure('Found a row containing "{}", but it contained the text "{}"',
                             row_text, text)

    def assert_text_in_table_row(self, element, text, row_text):
        """ At least one row containing row_text must also contain text. """

        for row in self.get_table_rows(element, row_text):
            if contains(row, text):
                return
        raise self._lacks(row_text, text)

    def assert_text_in_table_rows(self, element, text, row_text):
        """ There must be rows containing row_text and every one of them must contain text. """

        if not self.has_table_rows(element, row_text):
            raise self._failure('Found no row containing "{}" to look for the text "{}" in',
                                row_text, text)
        for row in self.get_table_rows(element, row_text):
            if not contains(row, text):
                raise self._lacks(row_text, text)

    def assert_text_not_in_table_row(self, element, text, row_text):
        """ Only the first row containing row_text is checked. """

        row = self.get_table_row(element, row_text)
        if contains(row, text):
            raise self._has(row_text, text)

    def assert_text_not_in_any_table_rows(self, element, text, row_text):
        if not self.has_table_rows(element, row_text):
            return
        for row in self.get_table_rows(element, row_text):
            if contains(row, text):
                raise self._has(row_text, text)

    def assert_text_not_in_table_row_or_no_table(self, element, text, row_text):
        if self.has_table(element):
            self.assert_text_not_in_any_table_rows(element, text, row_text)

    def assert_no_table_row_or_see_with_text(self, element, text, row_text):
        """
        Passes when there is no table, no row containing row_text, or every such row
        contains text. Used for statuses that are only shown while work is pending.

        Matching rows must contain text, as the step wording "I should see with the
        text ..." says. It is not a check that the text is absent.
        """

        if not self.has_table(element) or not self.has_table_rows(element, row_text):
            return
        for row in self.get_table_rows(element, row_text):
            if not contains(row, text):
                raise self._lacks(row_text, text)
