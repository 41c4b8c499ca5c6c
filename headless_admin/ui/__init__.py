"""
画面コンポーネント
"""

from .base import Component
from .layout import Header, Sidebar, NotFound, render_layout
from .posts import Posts, Post, PostForm
from .profiles import Profiles
from .projects import Projects

__all__ = [
    'Component', 'Header', 'Sidebar', 'NotFound', 'render_layout',
    'Posts', 'Post', 'PostForm', 'Profiles', 'Projects'
]
