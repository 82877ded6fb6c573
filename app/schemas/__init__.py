from .query import (
	FilterOp,
	Filter,
	RelationProjection,
	Ordering,
	QuerySpec,
	BackendError,
	QueryResult,
)
from .post import (
	CategoryRef,
	AuthorRef,
	PostRecord,
	PostBase,
	PostCreate,
	PostUpdate,
	PostResponse,
	PostListResponse,
	DashboardStatsResponse,
)
from .category import (
	CategoryBase,
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
	CategoryListResponse,
)
from .profile import (
	ProfileBase,
	ProfileCreate,
	ProfileUpdate,
	ProfileResponse,
)
from .auth import (
	LoginRequest,
	SessionUser,
	SessionResponse,
	AuthResult,
	ChangePasswordStart,
	ChangePasswordConfirm,
	MessageResponse,
)
from .page import (
	ContentSource,
	ListingState,
	PageMeta,
	BreadcrumbLink,
	PostCard,
	TickerView,
	HomePage,
	ListingPage,
	NewsListPage,
	CategoryPage,
	MediaLink,
	MediaPage,
	SearchPage,
	ArticlePage,
	InfoPage,
)

__all__ = [
	# Query
	"FilterOp",
	"Filter",
	"RelationProjection",
	"Ordering",
	"QuerySpec",
	"BackendError",
	"QueryResult",
	# Post
	"CategoryRef",
	"AuthorRef",
	"PostRecord",
	"PostBase",
	"PostCreate",
	"PostUpdate",
	"PostResponse",
	"PostListResponse",
	"DashboardStatsResponse",
	# Category
	"CategoryBase",
	"CategoryCreate",
	"CategoryUpdate",
	"CategoryResponse",
	"CategoryListResponse",
	# Profile
	"ProfileBase",
	"ProfileCreate",
	"ProfileUpdate",
	"ProfileResponse",
	# Auth
	"LoginRequest",
	"SessionUser",
	"SessionResponse",
	"AuthResult",
	"ChangePasswordStart",
	"ChangePasswordConfirm",
	"MessageResponse",
	# Pages
	"ContentSource",
	"ListingState",
	"PageMeta",
	"BreadcrumbLink",
	"PostCard",
	"TickerView",
	"HomePage",
	"ListingPage",
	"NewsListPage",
	"CategoryPage",
	"MediaLink",
	"MediaPage",
	"SearchPage",
	"ArticlePage",
	"InfoPage",
]
