"""
Pydantic 스키마 패키지
"""

from .auth import Token, RefreshTokenRequest, SetupStatus
from .user import (
    UserCreate,
    UserLogin,
    UserResponse,
    RegisterResponse,
    NameUpdate,
    PasswordUpdate,
    AdminUserCreate,
    AdminUserUpdate,
    PasswordReset,
)
from .site_settings import (
    SiteSettingsResponse,
    SiteSettingsUpdate,
    FooterSettingsResponse,
    FooterSettingsUpdate,
    SplashSettingsResponse,
    SplashSettingsUpdate,
    HomeGridLayoutUpdate,
)
from .board import (
    BoardCreate,
    BoardUpdate,
    BoardReorder,
    BoardResponse,
    CommunityGroupCreate,
    CommunityGroupResponse,
)
from .menu import MenuItemCreate, MenuItemUpdate, MenuItemResponse, MenuResponse, ReorderRequest
from .category import CategoryCreate, CategoryUpdate, CategoryResponse
from .tag import TagCreate, TagUpdate, TagResponse
from .content import ContentCreate, ContentUpdate, ContentListItem, ContentResponse, ContentListResponse
from .product import ProductCreate, ProductUpdate, ProductResponse
from .comment import CommentCreate, CommentUpdate, CommentResponse
from .post import PostCreate, PostUpdate, PostListItem, PostDetailResponse, PostListResponse
from .files import UploadResponse, OrphanScanResponse, OrphanDeleteResponse
from .home import HomeResponse

__all__ = [
    "Token",
    "RefreshTokenRequest",
    "SetupStatus",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "RegisterResponse",
    "NameUpdate",
    "PasswordUpdate",
    "AdminUserCreate",
    "AdminUserUpdate",
    "PasswordReset",
    "SiteSettingsResponse",
    "SiteSettingsUpdate",
    "FooterSettingsResponse",
    "FooterSettingsUpdate",
    "SplashSettingsResponse",
    "SplashSettingsUpdate",
    "HomeGridLayoutUpdate",
    "BoardCreate",
    "BoardUpdate",
    "BoardReorder",
    "BoardResponse",
    "CommunityGroupCreate",
    "CommunityGroupResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "MenuResponse",
    "ReorderRequest",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "ContentCreate",
    "ContentUpdate",
    "ContentListItem",
    "ContentResponse",
    "ContentListResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "PostCreate",
    "PostUpdate",
    "PostListItem",
    "PostDetailResponse",
    "PostListResponse",
    "UploadResponse",
    "OrphanScanResponse",
    "OrphanDeleteResponse",
    "HomeResponse",
]
