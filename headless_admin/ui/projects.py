"""
カスタム投稿タイプ（project）の一覧
"""
from typing import Any, Dict, Optional

from .base import Component, render_list
from ..api.wordpress_api import WordPressAPI
from ..utils.constants import Constants, DefaultValues
from ..utils.utils import format_wp_date, html_to_text, safe_get_nested


class Projects(Component):
    title = 'プロジェクト'

    def __init__(
        self,
        client: WordPressAPI,
        page: int = 1,
        per_page: int = Constants.DEFAULT_PER_PAGE,
        search: Optional[str] = None
    ):
        super().__init__(client)
        self.projects = self.use_resource(
            client.custom_post_type,
            params=client.list_params(page, per_page, search=search)
        )

    @staticmethod
    def render_item(project: Dict[str, Any]) -> str:
        title = html_to_text(safe_get_nested(project, 'title', 'rendered')) or DefaultValues.UNTITLED
        line = f"[{project.get('id', '')}] {format_wp_date(project.get('date'))}  {title}"
        if project.get('link'):
            line += f"\n     {project['link']}"
        return line

    def render(self) -> str:
        return self._with_heading(render_list(self.projects, self.render_item, DefaultValues.EMPTY_PROJECTS))
