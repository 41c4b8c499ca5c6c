"""
共通レイアウトコンポーネント (Header, Sidebar, NotFound)
"""
from typing import Any, Dict, List, Tuple

from .base import Component, render_list, render_status
from ..api.wordpress_api import WordPressAPI
from ..utils.constants import Constants, DefaultValues
from ..utils.utils import html_to_text, safe_get_nested

SEPARATOR = '-' * 60


class Header(Component):
    """サイト名と説明（/wp-json のサイトインデックス）"""

    def __init__(self, client: WordPressAPI):
        super().__init__(client)
        self.site = self.use_resource(client.index_url, default=dict)

    def render(self) -> str:
        status = render_status(self.site, expected=dict)
        if status is not None:
            return f"=== {DefaultValues.SITE_NAME_UNKNOWN} ===\n{status}"

        name = html_to_text(self.site.data.get('name')) or DefaultValues.SITE_NAME_UNKNOWN
        description = html_to_text(self.site.data.get('description'))
        lines = [f"=== {name} ==="]
        if description:
            lines.append(description)
        return '\n'.join(lines)


class Sidebar(Component):
    """ナビゲーションと最近の投稿"""

    title = '最近の投稿'

    def __init__(
        self,
        client: WordPressAPI,
        navigation: List[Tuple[str, str]],
        current_path: str = '/',
        recent_count: int = Constants.SIDEBAR_RECENT_POSTS
    ):
        super().__init__(client)
        self.navigation = navigation
        self.current_path = current_path
        self.recent = self.use_resource(
            'posts',
            params={'per_page': recent_count, '_fields': 'id,title'}
        )

    @staticmethod
    def render_recent_item(post: Dict[str, Any]) -> str:
        title = html_to_text(safe_get_nested(post, 'title', 'rendered')) or DefaultValues.UNTITLED
        return f"- {title} (/posts/{post.get('id', '')})"

    def render(self) -> str:
        nav = []
        for path, label in self.navigation:
            marker = '*' if path == self.current_path else ' '
            nav.append(f"{marker} {label}: {path}")

        recent = render_list(self.recent, self.render_recent_item, DefaultValues.EMPTY_POSTS)
        return '\n'.join(nav) + '\n' + self._with_heading(recent)


class NotFound(Component):
    """未定義のパス"""

    def __init__(self, client: WordPressAPI, path: str = ''):
        super().__init__(client)
        self.path = path

    def render(self) -> str:
        return f"404 ページが見つかりません: {self.path}"


def render_layout(header: Component, sidebar: Component, main: Component) -> str:
    """Header / Sidebar / メインを区切り線でつなげて描画"""
    return '\n'.join([
        header.render(),
        SEPARATOR,
        sidebar.render(),
        SEPARATOR,
        main.render(),
    ])
