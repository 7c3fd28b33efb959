"""Validated API payload models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["User", "Merchant", "Delivery", "user", "merchant", "delivery"]


class ApiModel(BaseModel):
    """Base model for backend payloads using Mongo-style ids."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class UserProfile(ApiModel):
    """Authenticated user's profile."""

    id: str = Field(alias="_id")
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    gender: str | None = None
    avatar: str | None = None
    addresses: list[object] = Field(default_factory=list)
    is_phone_verified: bool = Field(default=False, alias="isPhoneVerified")
    is_email_verified: bool = Field(default=False, alias="isEmailVerified")
    is_profile_complete: bool = Field(default=False, alias="isProfileComplete")
    role: Role = "User"
    is_busy: bool | None = Field(default=None, alias="isBusy")


class Rating(ApiModel):
    """Average rating and review count."""

    average: float = 0.0
    total_reviews: int = Field(default=0, alias="totalReviews")


class Product(ApiModel):
    """Catalog product."""

    id: str = Field(alias="_id")
    name: str
    description: str | None = None
    category: str | None = None
    subcategory: str | None = None
    images: list[str] = Field(default_factory=list)
    price: float = 0.0
    sizes: list[str] = Field(default_factory=list)
    quantity: int | None = None
    store_id: object | None = Field(default=None, alias="storeId")
    is_active: bool = Field(default=True, alias="isActive")
    rating: Rating | None = None


class Pagination(ApiModel):
    """Paging metadata for list endpoints."""

    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_prev_page: bool = Field(default=False, alias="hasPrevPage")


class StoreContact(ApiModel):
    """Optional store contact channels."""

    phone: str | None = None
    email: str | None = None
    website: str | None = None


class Store(ApiModel):
    """Merchant store."""

    id: str = Field(alias="_id")
    store_name: str = Field(alias="storeName")
    description: str | None = None
    store_images: list[str] = Field(default_factory=list, alias="storeImages")
    address: str | None = None
    map_link: str | None = Field(default=None, alias="mapLink")
    contact: StoreContact = Field(default_factory=StoreContact)
    working_days: dict[str, bool] = Field(default_factory=dict, alias="workingDays")
    rating: Rating | None = None
    is_active: bool = Field(default=True, alias="isActive")


class FavoriteEntry(ApiModel):
    """A favorited product as returned by the favorites listing."""

    id: str = Field(alias="_id")
    product: Product
    created_at: str | None = Field(default=None, alias="createdAt")


class FavoriteStatus(ApiModel):
    """Favorite flag for one product."""

    product_id: str = Field(alias="productId")
    is_favorite: bool = Field(alias="isFavorite")


class UploadTarget(ApiModel):
    """Signed upload destination and the URL the file will be served from."""

    upload_url: str = Field(alias="uploadUrl")
    public_url: str = Field(alias="publicUrl")
    file_type: str | None = Field(default=None, alias="fileType")
    file_name: str | None = Field(default=None, alias="fileName")


class SettlementSummary(ApiModel):
    """Totals for a settlement period."""

    total_orders: int = Field(default=0, alias="totalOrders")
    total_revenue: float = Field(default=0.0, alias="totalRevenue")
    total_items_value: float = Field(default=0.0, alias="totalItemsValue")
    total_delivery_fees: float = Field(default=0.0, alias="totalDeliveryFees")
    platform_fee: float = Field(default=0.0, alias="platformFee")
    net_payout: float = Field(default=0.0, alias="netPayout")


class SettlementReport(ApiModel):
    """Merchant settlement report."""

    period: dict[str, object] = Field(default_factory=dict)
    summary: SettlementSummary = Field(default_factory=SettlementSummary)
    payment_breakdown: dict[str, object] = Field(
        default_factory=dict, alias="paymentBreakdown"
    )
    orders: list[dict[str, object]] = Field(default_factory=list)


class PayoutBucket(ApiModel):
    """Count and amount of payouts in one state."""

    count: int = 0
    amount: float = 0.0


class PayoutSummary(ApiModel):
    """Completed and pending payouts."""

    completed: PayoutBucket = Field(default_factory=PayoutBucket)
    pending: PayoutBucket = Field(default_factory=PayoutBucket)


OrderStatus = Literal[
    "Pending",
    "Accepted",
    "Rejected",
    "Processing",
    "ReadyForPickup",
    "Assigned",
    "PickedUp",
    "OnTheWay",
    "Shipped",
    "Delivered",
    "Cancelled",
]

CANCELLABLE_STATUSES: frozenset[str] = frozenset({"Pending", "Accepted", "Processing"})


class OrderItem(ApiModel):
    """Ordered product line; the product may be an id or a populated document."""

    product: object
    quantity: int
    price: float
    size: str | None = None
    notes: str | None = None


class Order(ApiModel):
    """Order placed with one store."""

    id: str = Field(alias="_id")
    user: object | None = None
    store: object | None = None
    order_items: list[OrderItem] = Field(default_factory=list, alias="orderItems")
    total_amount: float = Field(default=0.0, alias="totalAmount")
    shipping_address: str | None = Field(default=None, alias="shippingAddress")
    status: str = "Pending"
    payment_method: str = Field(default="COD", alias="paymentMethod")
    payment_status: str | None = Field(default=None, alias="paymentStatus")
    cancellation_reason: str | None = Field(default=None, alias="cancellationReason")
    created_at: str | None = Field(default=None, alias="createdAt")

    @property
    def can_cancel(self) -> bool:
        return self.status in CANCELLABLE_STATUSES
