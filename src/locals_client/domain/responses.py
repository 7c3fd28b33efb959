"""Per-endpoint response envelopes."""

from pydantic import Field

from locals_client.domain.models import (
    ApiModel,
    FavoriteEntry,
    FavoriteStatus,
    Order,
    Pagination,
    PayoutSummary,
    Product,
    SettlementReport,
    Store,
    UploadTarget,
    UserProfile,
)


class Envelope(ApiModel):
    """Fields every backend response carries."""

    success: bool
    message: str | None = None


class MessageResponse(Envelope):
    """Response with no payload beyond the message."""


class AuthResponse(Envelope):
    """Login, registration and OTP verification response."""

    token: str
    user: UserProfile


class ProfileResponse(Envelope):
    """Profile read or update response."""

    user: UserProfile


class ProductListResponse(Envelope):
    """Paged product listing."""

    products: list[Product] = Field(default_factory=list)
    pagination: Pagination | None = None


class ProductResponse(Envelope):
    """Single product."""

    product: Product


class StoreListResponse(Envelope):
    """Store listing."""

    stores: list[Store] = Field(default_factory=list)
    pagination: Pagination | None = None


class StoreResponse(Envelope):
    """Single store."""

    store: Store


class FavoriteListResponse(Envelope):
    """The user's favorites."""

    favorites: list[FavoriteEntry] = Field(default_factory=list)


class FavoriteStatusResponse(Envelope):
    """Favorite flag for one product."""

    is_favorite: bool = Field(alias="isFavorite")


class FavoriteStatusListResponse(Envelope):
    """Favorite flags for several products."""

    favorites: list[FavoriteStatus] = Field(default_factory=list)


class UploadUrlResponse(Envelope, UploadTarget):
    """Signed upload destination."""


class SettlementReportResponse(Envelope):
    """Settlement report for a period."""

    report: SettlementReport


class PayoutSummaryResponse(Envelope):
    """Payout summary."""

    summary: PayoutSummary


class OrderResponse(Envelope):
    """Single order, returned by create, read and status changes."""

    order: Order
    requires_payment: bool = Field(default=False, alias="requiresPayment")


class OrderListResponse(Envelope):
    """Paged order listing."""

    orders: list[Order] = Field(default_factory=list)
    pagination: Pagination | None = None
