"""
Generation module - test scaffold synthesis services.

This module contains the components that turn a parsed class into a
synthesized test unit.
"""
