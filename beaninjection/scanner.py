"""
PackageScanner

Discovery by walking a package: every module below the base package is
imported and its tagged classes and functions are described.

Example::

    scanner = PackageScanner("myapp")
    context = ApplicationContext(scanner)
    context.init()
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator

from .decorators import is_bean_method, is_component, is_configuration
from .descriptor import DescriptorSet, DescriptorSource
from .introspection import describe_component, describe_factories, describe_function

logger = logging.getLogger(__name__)


class PackageScanner(DescriptorSource):
    """Descriptor source that scans a package for tagged candidates.

    Collects:
        - classes tagged ``@component`` (and ``@configuration``)
        - ``@bean`` operations of ``@configuration`` classes
        - module-level functions tagged ``@bean``

    Only objects defined in the scanned module are collected, so
    re-exports in ``__init__`` files are not discovered twice.

    Attributes:
        base_package: Dotted name of the package to scan
    """

    def __init__(self, base_package: str):
        self.base_package = base_package

    def _iter_modules(self) -> Iterator[ModuleType]:
        root = importlib.import_module(self.base_package)
        yield root

        # plain modules have no __path__ and nothing below them
        path = getattr(root, '__path__', None)
        if path is None:
            return
        for info in pkgutil.walk_packages(path, prefix=f"{root.__name__}."):
            yield importlib.import_module(info.name)

    def load(self) -> DescriptorSet:
        descriptors = DescriptorSet()
        for module in self._iter_modules():
            for _, obj in inspect.getmembers(module):
                if getattr(obj, '__module__', None) != module.__name__:
                    continue
                if is_component(obj):
                    descriptors.components.append(describe_component(obj))
                    if is_configuration(obj):
                        descriptors.factories.extend(describe_factories(obj))
                elif inspect.isfunction(obj) and is_bean_method(obj):
                    descriptors.factories.append(describe_function(obj))

        logger.debug(
            "Scanned package %s: %d component(s), %d factory operation(s)",
            self.base_package, len(descriptors.components), len(descriptors.factories)
        )
        return descriptors
