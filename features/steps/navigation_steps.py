""" site specific navigation steps used by the example features """

# pylint: disable=C0111

from behave import when


PAGES = {
    'content overview': '/admin/content',
    'import queue': '/admin/content/feed',
    'content types listing': '/admin/structure/types',
}


@when('I visit the {page}')
def visit_page(context, page):
    context.drupal.session.visit_path(PAGES[page])
