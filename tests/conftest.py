"""
Test Configuration and Utilities

Common base classes and helper functions for BeanInjection tests
"""

import unittest
from typing import Iterable, List, Type

from beaninjection import ApplicationContext, StaticDescriptorSource


def create_source(
    *component_classes: Type,
    configurations: Iterable[Type] = (),
    functions: Iterable = ()
) -> StaticDescriptorSource:
    """
    Create a static descriptor source for the given classes.

    Args:
        *component_classes: Classes to register as components
        configurations: Configuration classes (component + @bean operations)
        functions: Module-level factory functions

    Returns:
        A StaticDescriptorSource with the registrations

    Example:
        >>> source = create_source(Database, CacheService)
        >>> context = ApplicationContext(source)
    """
    source = StaticDescriptorSource()
    for cls in component_classes:
        source.add_component(cls)
    for cls in configurations:
        source.add_configuration(cls)
    for func in functions:
        source.add_function(func)
    return source


class BeanInjectionTestCase(unittest.TestCase):
    """
    Base test case class for BeanInjection tests.

    Contexts created through create_context() are closed after each test.
    """

    def setUp(self):
        self._contexts: List[ApplicationContext] = []

    def tearDown(self):
        for context in self._contexts:
            context.close()

    def create_context(self, *component_classes: Type, eager: bool = False, **kwargs) -> ApplicationContext:
        """Create and initialize a context over the given classes."""
        context = ApplicationContext(create_source(*component_classes, **kwargs), eager=eager)
        self._contexts.append(context)
        context.init()
        return context
