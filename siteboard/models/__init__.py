"""
모델 패키지
"""

from .user import User
from .site_settings import SiteSettings
from .menu import Menu, MenuItem
from .category import Category
from .tag import Tag, ContentTag
from .content import Content
from .product import Product
from .board import Board
from .post import Post, PostAttachment
from .comment import Comment
from .like import PostLike
from .bookmark import PostScrap

__all__ = [
    "User",
    "SiteSettings",
    "Menu",
    "MenuItem",
    "Category",
    "Tag",
    "ContentTag",
    "Content",
    "Product",
    "Board",
    "Post",
    "PostAttachment",
    "Comment",
    "PostLike",
    "PostScrap",
]
