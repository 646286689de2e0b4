"""
Test Fixtures

Common test classes used across test modules
"""

from abc import ABC, abstractmethod

from beaninjection import bean, configuration, constructor


class Database:
    """Test database class"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache service"""

    def __init__(self):
        self.cache = {}


class UserRepository:
    """Test repository with dependencies"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class CounterService:
    """Service with mutable state for testing singleton behavior"""

    def __init__(self):
        self.counter = 0

    def increment(self):
        self.counter += 1
        return self.counter


class ServiceWithoutHint:
    """Service with missing type hint - for error testing"""

    def __init__(self, dependency):  # No type hint!
        self.dependency = dependency


class Level1:
    """First level of nested dependencies"""
    pass


class Level2:
    """Second level of nested dependencies"""

    def __init__(self, l1: Level1):
        self.l1 = l1


class Level3:
    """Third level of nested dependencies"""

    def __init__(self, l2: Level2):
        self.l2 = l2


class Level4:
    """Fourth level of nested dependencies"""

    def __init__(self, l3: Level3):
        self.l3 = l3


class ServiceA:
    """Half of a two-bean cycle"""

    def __init__(self, b: 'ServiceB'):
        self.b = b


class ServiceB:
    """Other half of a two-bean cycle"""

    def __init__(self, a: ServiceA):
        self.a = a


class Storage(ABC):
    """Abstract dependency with several implementations"""

    @abstractmethod
    def kind(self) -> str:
        pass


class DiskStorage(Storage):
    def kind(self) -> str:
        return "disk"


class MemoryStorage(Storage):
    def kind(self) -> str:
        return "memory"


class Archive:
    """Depends on the abstract Storage"""

    def __init__(self, storage: Storage):
        self.storage = storage


class Settings:
    """Component with an alternate constructor"""

    def __init__(self):
        self.source = "defaults"
        self.db = None

    @classmethod
    @constructor
    def from_database(cls, db: Database) -> 'Settings':
        settings = cls()
        settings.source = "database"
        settings.db = db
        return settings


class Clock:
    """Produced by a factory operation"""

    def __init__(self, zone: str = "UTC"):
        self.zone = zone


@configuration
class AppConfig:
    """Configuration contributing factory beans"""

    def __init__(self):
        self.calls = 0

    @bean
    def clock(self) -> Clock:
        self.calls += 1
        return Clock("Asia/Seoul")

    @staticmethod
    @bean
    def greeting(db: Database) -> str:
        return f"hello from {db.name}"

    @bean
    def cachedRepository(self, db: Database, cache: CacheService) -> UserRepository:
        return UserRepository(db, cache)
