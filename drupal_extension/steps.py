"""
Step definitions for interacting with Drupal.

Import this module from a file in features/steps/ to make the steps available:

    from drupal_extension.steps import *  # noqa

Every step works through context.drupal, set up by drupal_extension.hooks.before_scenario.
"""

# pylint: disable=C0111

import sys
from types import SimpleNamespace

from behave import given, then, use_step_matcher
from selenium.webdriver.common.by import By

from drupal_extension.context import split_list
from drupal_extension.exceptions import AssertionFailed, DrupalExtensionError, NotFound


use_step_matcher('re')

QUOTED = '"(?P<{}>[^"]*)"'


def quoted(name):
    return QUOTED.format(name)


def table_hash(table):
    """ Rows of a table with a heading row, as dicts. """
    return [dict(zip(table.headings, row.cells)) for row in table]


def table_rows_hash(table):
    """ A two column table without headings, as a dict of first column to second column. """

    rows = [table.headings] + [row.cells for row in table]
    return {row[0]: row[1] for row in rows}


def visit_node(drupal, saved, suffix=''):
    drupal.session.visit_path('/node/{}{}'.format(saved.nid, suffix))


# authentication

@given(r'I am (?:an anonymous user|not logged in)')
@then(r'I log out')
def assert_anonymous_user(context):
    context.drupal.logout(fast=True)


def log_in_with_role(drupal, role, fields=None):
    if drupal.logged_in_with_role(role):
        return
    user = drupal.new_user(role=role, **(fields or {}))
    drupal.user_create(user)
    drupal.user_add_roles(user, role)
    drupal.login(user)


@given(r'I am logged in as a user with the ' + quoted('role') + r' roles?')
@given(r'I am logged in as an? ' + quoted('role'))
def assert_authenticated_by_role(context, role):
    log_in_with_role(context.drupal, role)


@given(r'I am logged in as a user with the ' + quoted('role')
       + r' roles? and I have the following fields:')
def assert_authenticated_by_role_with_given_fields(context, role):
    log_in_with_role(context.drupal, role, table_rows_hash(context.table))


@given(r'I am logged in as ' + quoted('name'))
def assert_logged_in_by_name(context, name):
    drupal = context.drupal
    drupal.login(drupal.users.get_user(name))


@given(r'I am logged in as a user with the ' + quoted('permissions') + r' permissions?')
def assert_logged_in_with_permissions(context, permissions):
    drupal = context.drupal
    role = drupal.role_create(split_list(permissions))
    user = drupal.new_user(role=role)
    drupal.user_create(user)
    drupal.driver.user_add_role(user, role)
    drupal.login(user)


# table rows

@then(r'I should see (?:the text )?' + quoted('text') + ' in the ' + quoted('row_text')
      + r' row')
def assert_text_in_table_row(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_text_in_table_row(drupal.session.page(), text, row_text)


@then(r'I should see (?:the text )?' + quoted('text') + ' in all the ' + quoted('row_text')
      + r' rows')
def assert_text_in_table_rows(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_text_in_table_rows(drupal.session.page(), text, row_text)


@then(r'I should not see (?:the text )?' + quoted('text') + ' in the ' + quoted('row_text')
      + r' row')
def assert_text_not_in_table_row(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_text_not_in_table_row(drupal.session.page(), text, row_text)


@then(r'I should not see (?:the text )?' + quoted('text') + ' in any ' + quoted('row_text')
      + r' rows')
def assert_text_not_in_any_table_rows(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_text_not_in_any_table_rows(drupal.session.page(), text, row_text)


@then(r'I should not see (?:the text )?' + quoted('text') + ' in any ' + quoted('row_text')
      + r' rows or no table')
def assert_text_not_in_table_row_or_no_table(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_text_not_in_table_row_or_no_table(drupal.session.page(), text, row_text)


@then(r'I should see with (?:the text )?' + quoted('text') + ' in the ' + quoted('row_text')
      + r' row, no rows, or no table')
def assert_no_table_row_or_see_with_text(context, text, row_text):
    drupal = context.drupal
    drupal.rows.assert_no_table_row_or_see_with_text(drupal.session.page(), text, row_text)


@given(r'I click ' + quoted('link') + ' in the ' + quoted('row_text') + r' row')
@then(r'I (?:should )?see the ' + quoted('link') + ' in the ' + quoted('row_text') + r' row')
def assert_click_in_table_row(context, link, row_text):
    """ For administrative listings such as admin/structure/types. """

    drupal = context.drupal
    row = drupal.rows.get_table_row(drupal.session.page(), row_text)
    link_element = drupal.rows.find_link(row, link)
    if link_element is None:
        raise NotFound('Found a row containing "{}", but no "{}" link on the page {}'.format(
            row_text, link, drupal.session.current_url()))
    link_element.click()


# site maintenance

@given(r'the cache has been cleared')
def assert_cache_clear(context):
    context.drupal.driver.clear_cache()


@given(r'I run cron')
def assert_cron(context):
    context.drupal.driver.run_cron()


# content

@given(r'I am viewing an? ' + quoted('type') + r' (?:content )?with the title '
       + quoted('title'))
@given(r'an? ' + quoted('type') + r' (?:content )?with the title ' + quoted('title'))
def create_node(context, type, title):        # pylint: disable=W0622
    drupal = context.drupal
    saved = drupal.node_create(SimpleNamespace(title=title, type=type))
    visit_node(drupal, saved)


@given(r'I am viewing my ' + quoted('type') + r' (?:content )?with the title '
       + quoted('title'))
def create_my_node(context, type, title):     # pylint: disable=W0622
    drupal = context.drupal
    if drupal.users.current_user_is_anonymous():
        raise DrupalExtensionError('There is no current logged in user to create a node for.')

    node = SimpleNamespace(title=title, type=type, body=drupal.random.name(255),
                           uid=drupal.users.get_current_user().uid)
    saved = drupal.node_create(node)
    visit_node(drupal, saved)


@given(quoted('type') + r' content:')
def create_nodes(context, type):              # pylint: disable=W0622
    for node_hash in table_hash(context.table):
        node = SimpleNamespace(**node_hash)
        node.type = type
        context.drupal.node_create(node)


@given(r'I am viewing an? ' + quoted('type') + r'(?: content)?:')
def assert_viewing_node(context, type):       # pylint: disable=W0622
    drupal = context.drupal
    node = SimpleNamespace(type=type)
    for field, value in table_rows_hash(context.table).items():
        setattr(node, field, value)
    saved = drupal.node_create(node)
    visit_node(drupal, saved)


@then(r'I should be able to edit an? ' + quoted('type') + r'(?: content)?')
def assert_edit_node_of_type(context, type):  # pylint: disable=W0622
    drupal = context.drupal
    saved = drupal.node_create(SimpleNamespace(type=type, title='Test {}'.format(type)))
    visit_node(drupal, saved, '/edit')

    selector = drupal.session.get_parameter('selectors')['node_edit_form']
    if not drupal.session.page().find_elements(By.CSS_SELECTOR, selector):
        raise AssertionFailed('No "{}" edit form found on the page {}'.format(
            type, drupal.session.current_url()))


# taxonomy

@given(r'I am viewing an? ' + quoted('vocabulary') + ' term with the name '
       + quoted('name'))
@given(r'an? ' + quoted('vocabulary') + ' term with the name ' + quoted('name'))
def create_term(context, vocabulary, name):
    drupal = context.drupal
    term = SimpleNamespace(name=name, vocabulary_machine_name=vocabulary,
                           description=drupal.random.name(255))
    saved = drupal.term_create(term)
    drupal.session.visit_path('/taxonomy/term/{}'.format(saved.tid))


@given(quoted('vocabulary') + r' terms:')
def create_terms(context, vocabulary):
    for term_hash in table_hash(context.table):
        term = SimpleNamespace(**term_hash)
        term.vocabulary_machine_name = vocabulary
        context.drupal.term_create(term)


# users and languages

@given(r'users:')
def create_users(context):
    """
    Creates users from a table such as:

        | name     | mail        | roles        |
        | user foo | foo@bar.com | role1, role2 |
    """

    drupal = context.drupal
    for user_hash in table_hash(context.table):
        roles = split_list(user_hash.pop('roles', ''))
        if 'pass' in user_hash:
            user_hash['password'] = user_hash.pop('pass')
        user = SimpleNamespace(**user_hash)
        if not getattr(user, 'password', None):
            user.password = drupal.random.name()
        drupal.user_create(user)

        for role in roles:
            drupal.driver.user_add_role(user, role)


@given(r'(?:the|these) (?:following )?languages are available:')
def create_languages(context):
    for row in table_hash(context.table):
        langcode = row.get('languages') or row.get('langcode')
        context.drupal.language_create(SimpleNamespace(langcode=langcode))


# debugging

@then(r'(?:I )?break')
def put_a_breakpoint(context):                # pylint: disable=W0613
    """ Waits for the return key. Run behave with --no-capture to see the prompt. """

    sys.stdout.write("\033[s \033[93m[Breakpoint] Press \033[1;93m[RETURN]\033[0;93m"
                     " to continue, or 'q' to quit...\033[0m")
    sys.stdout.flush()
    while True:
        answer = input().strip()[:1]
        if answer in ('', 'y', 'Y'):
            break
        if answer in ('q', 'Q'):
            raise DrupalExtensionError('Exiting test intentionally.')
        sys.stdout.write("\nInvalid entry '{}'.  Please enter 'y', 'q', or the enter key.\n"
                         .format(answer))
    sys.stdout.write('\033[u')


use_step_matcher('parse')
