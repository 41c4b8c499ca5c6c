"""
ユーザープロフィール一覧
"""
from typing import Any, Dict, Optional

from .base import Component, render_list
from ..api.wordpress_api import WordPressAPI
from ..utils.constants import Constants, DefaultValues
from ..utils.utils import html_to_text, truncate


class Profiles(Component):
    """users エンドポイントの一覧"""

    title = 'プロフィール'

    def __init__(
        self,
        client: WordPressAPI,
        page: int = 1,
        per_page: int = Constants.DEFAULT_PER_PAGE,
        search: Optional[str] = None
    ):
        super().__init__(client)
        self.users = self.use_resource('users', params=client.list_params(page, per_page, search=search))

    @staticmethod
    def render_item(user: Dict[str, Any]) -> str:
        line = f"[{user.get('id', '')}] {user.get('name', '')} (@{user.get('slug', '')})"
        if user.get('url'):
            line += f" {user['url']}"
        description = html_to_text(user.get('description'))
        if description:
            line += f"\n     {truncate(description, Constants.EXCERPT_LENGTH)}"
        return line

    def render(self) -> str:
        return self._with_heading(render_list(self.users, self.render_item, DefaultValues.EMPTY_PROFILES))
