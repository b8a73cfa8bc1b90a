"""Base services container for dependency injection."""

from config import Config
from storage.manager import StorageManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject fakes for testing. The session is restored from durable
    storage on construction.

    Args:
        config: Application configuration object.
        storage: Optional durable storage for testing. If None, uses StorageManager.
        transport: Optional httpx transport for testing.
    """

    def __init__(self, config: Config, storage=None, transport=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            storage: Optional storage for dependency injection (testing).
                     If None, creates StorageManager from config.
            transport: Optional httpx transport passed to the API client.
        """
        self.config = config
        self.storage = storage or StorageManager(config)

        # Lazy import to avoid circular dependencies
        from api.client import ApiClient
        from services.budgets import BudgetService
        from services.cache import LocalCache
        from services.session import SessionStore
        from services.transactions import TransactionService

        self.session = SessionStore(self.storage)
        self.session.restore()

        self.cache = LocalCache()
        self.session.add_logout_listener(self.cache.invalidate)

        self.client = ApiClient(config, self.session, transport=transport)
        self.budgets = BudgetService(self.client, self.cache)
        self.transactions = TransactionService(self.client, self.cache)

    async def check_connection(self) -> str:
        """Probe the backend with the current credentials.

        Returns:
            The plain-text body of GET /api/test.
        """
        return await self.client.get_text("/api/test")

    async def aclose(self) -> None:
        await self.client.aclose()
