"""
Behave step definitions and helpers for testing Drupal sites through Selenium.
"""

__version__ = '1.0.0'
