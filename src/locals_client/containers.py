"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.adapters.blob_client import BlobClient, HttpxBlobClient
from locals_client.adapters.favorites_api import RestFavoritesApi
from locals_client.adapters.local_storage import JsonFileStorage, KeyValueStorage
from locals_client.adapters.merchant_orders_api import RestMerchantOrdersApi
from locals_client.adapters.orders_api import RestOrdersApi
from locals_client.adapters.products_api import RestProductsApi
from locals_client.adapters.settlements_api import RestSettlementsApi
from locals_client.adapters.stores_api import RestStoresApi
from locals_client.adapters.uploads_api import RestUploadsApi
from locals_client.adapters.users_api import RestUsersApi
from locals_client.app_logging import configure_logging
from locals_client.config import Settings
from locals_client.services.auth import AuthService
from locals_client.services.cart import CartService
from locals_client.services.catalog import CatalogService
from locals_client.services.favorites import FavoritesService
from locals_client.services.location import LocationService
from locals_client.services.merchant_orders import MerchantOrderService
from locals_client.services.notifications import LoggingNotifier, Notifier
from locals_client.services.orders import OrderService
from locals_client.services.session import SessionService
from locals_client.services.settlements import SettlementService
from locals_client.services.stores import StoreService
from locals_client.services.uploads import ImageUploader, UploadsApi


@dataclass
class AppContainer:
    """Holds client-wide dependencies."""

    settings: Settings
    storage: KeyValueStorage
    api_client: HttpxApiClient
    blob_client: BlobClient
    notifier: Notifier
    uploads_api: UploadsApi
    session_service: SessionService
    location_service: LocationService
    auth_service: AuthService
    catalog_service: CatalogService
    store_service: StoreService
    favorites_service: FavoritesService
    settlement_service: SettlementService
    cart_service: CartService
    order_service: OrderService
    merchant_order_service: MerchantOrderService
    close_resources: Callable[[], Awaitable[None]]

    async def init(self) -> None:
        """Restore persisted session and location, then load favorites."""
        await self.session_service.restore()
        await self.location_service.restore()
        await self.favorites_service.load()

    def new_uploader(
        self,
        on_change: Callable[[list[str]], None],
        max_items: int | None = None,
    ) -> ImageUploader:
        """Create an uploader for one form's image list."""
        return ImageUploader(
            uploads_api=self.uploads_api,
            blob_client=self.blob_client,
            notifier=self.notifier,
            on_change=on_change,
            max_items=max_items or self.settings.max_upload_items,
            role=self.settings.upload_role,
            permanent=self.settings.upload_permanent,
            concurrency=self.settings.upload_concurrency,
        )


def build_container(
    settings: Settings | None = None, notifier: Notifier | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    resolved_notifier = notifier or LoggingNotifier()
    storage = JsonFileStorage.create(resolved_settings.storage_path)
    api_client = HttpxApiClient.create(
        base_url=resolved_settings.backend_url,
        storage=storage,
        timeout=resolved_settings.request_timeout_seconds,
    )
    blob_client = HttpxBlobClient.create()
    users_api = RestUsersApi(api_client)
    session_service = SessionService(storage, users_api)
    cart_service = CartService()

    async def close_resources() -> None:
        await api_client.close()
        await blob_client.close()

    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        api_client=api_client,
        blob_client=blob_client,
        notifier=resolved_notifier,
        uploads_api=RestUploadsApi(api_client),
        session_service=session_service,
        location_service=LocationService(storage),
        auth_service=AuthService(users_api, session_service, resolved_notifier),
        catalog_service=CatalogService(RestProductsApi(api_client), resolved_notifier),
        store_service=StoreService(RestStoresApi(api_client), resolved_notifier),
        favorites_service=FavoritesService(
            RestFavoritesApi(api_client), session_service, resolved_notifier
        ),
        settlement_service=SettlementService(
            RestSettlementsApi(api_client), resolved_notifier
        ),
        cart_service=cart_service,
        order_service=OrderService(
            RestOrdersApi(api_client), cart_service, session_service, resolved_notifier
        ),
        merchant_order_service=MerchantOrderService(
            RestMerchantOrdersApi(api_client), resolved_notifier
        ),
        close_resources=close_resources,
    )
