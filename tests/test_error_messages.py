"""
Error Messages Tests

Tests for error message quality and exception hierarchy.
Verifies that error messages are helpful and contain sufficient context.
"""

import unittest

from beaninjection import ApplicationContext, StaticDescriptorSource
from beaninjection.exceptions import (
    AlreadyInitializedError,
    AmbiguousDependencyError,
    BeanInjectionError,
    BeanNotOfRequiredTypeError,
    BeanResolutionError,
    CircularDependencyError,
    ConstructionFailureError,
    ContextClosedError,
    DefinitionNotFoundError,
    DuplicateDefinitionError,
    MissingDependencyError,
    NotInitializedError,
    NullFactoryResultError,
    SignatureInspectionError,
    SingletonAlreadyRegisteredError,
)


class Database:
    """Simple database for testing."""
    pass


class CacheService:
    """Simple cache service for testing."""
    pass


class UserRepository:
    """Repository with database dependency."""

    def __init__(self, db: Database):
        self.db = db


class TestExceptionHierarchy(unittest.TestCase):
    """Test that all exceptions inherit from BeanInjectionError."""

    def test_resolution_errors_carry_bean_name(self):
        """Every per-bean error exposes bean_name."""
        errors = [
            DuplicateDefinitionError("a"),
            DefinitionNotFoundError("a"),
            MissingDependencyError("a", Database),
            AmbiguousDependencyError("a", Database, ["b", "c"]),
            CircularDependencyError("a", ["a", "b", "a"]),
            NullFactoryResultError("a"),
            ConstructionFailureError("a", ValueError("x")),
            SingletonAlreadyRegisteredError("a"),
            BeanNotOfRequiredTypeError("a", Database, object()),
        ]

        for error in errors:
            self.assertIsInstance(error, BeanResolutionError)
            self.assertIsInstance(error, BeanInjectionError)
            self.assertEqual(error.bean_name, "a")

    def test_lifecycle_errors_inherit_from_base(self):
        for error in (
            AlreadyInitializedError("test"),
            NotInitializedError("test"),
            ContextClosedError("test"),
            SignatureInspectionError("test"),
        ):
            self.assertIsInstance(error, BeanInjectionError)
            self.assertNotIsInstance(error, BeanResolutionError)

    def test_catch_all_beaninjection_errors(self):
        """All container errors can be caught with the base class."""
        context = ApplicationContext(StaticDescriptorSource())
        context.init()

        try:
            context.get("anything")
        except BeanInjectionError as e:
            self.assertIsInstance(e, DefinitionNotFoundError)
        else:
            self.fail("DefinitionNotFoundError not raised")


class TestDefinitionNotFoundErrorMessages(unittest.TestCase):
    """Test DefinitionNotFoundError message quality."""

    def setUp(self):
        source = StaticDescriptorSource()
        source.add_component(Database).add_component(CacheService)
        self.context = ApplicationContext(source)
        self.context.init()

    def test_message_includes_bean_name(self):
        with self.assertRaises(DefinitionNotFoundError) as ctx:
            self.context.get("userRepository")

        self.assertIn("userRepository", str(ctx.exception))

    def test_message_lists_registered_names(self):
        with self.assertRaises(DefinitionNotFoundError) as ctx:
            self.context.get("userRepository")

        message = str(ctx.exception)
        self.assertIn("database", message)
        self.assertIn("cacheService", message)

    def test_empty_registry(self):
        error = DefinitionNotFoundError("x", [])

        self.assertIn("Registered beans: None", str(error))


class TestDependencyErrorMessages(unittest.TestCase):
    """Test messages of dependency matching errors."""

    def test_missing_names_type_and_requester(self):
        message = str(MissingDependencyError("userRepository", Database))

        self.assertIn("userRepository", message)
        self.assertIn("Database", message)

    def test_ambiguous_lists_sorted_candidates(self):
        error = AmbiguousDependencyError("archive", Database, ["memory", "disk"])

        self.assertEqual(error.candidates, ("disk", "memory"))
        self.assertIn("disk, memory", str(error))

    def test_circular_shows_path(self):
        message = str(CircularDependencyError("a", ["a", "b", "a"]))

        self.assertIn("a -> b -> a", message)

    def test_construction_failure_includes_cause(self):
        message = str(ConstructionFailureError("db", ConnectionError("refused")))

        self.assertIn("db", message)
        self.assertIn("ConnectionError: refused", message)

    def test_duplicate_names_bean(self):
        source = StaticDescriptorSource()
        source.add_component(Database).add_component(Database)
        context = ApplicationContext(source)

        with self.assertRaises(DuplicateDefinitionError) as ctx:
            context.init()

        self.assertIn("'database'", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
