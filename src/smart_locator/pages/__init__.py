"""
Pages module - Page-object base class.
"""

from smart_locator.pages.base_page import BasePage

__all__ = ["BasePage"]
