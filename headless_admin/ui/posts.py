"""
投稿関連コンポーネント (Posts, Post, PostForm)
"""
import logging
from typing import Any, Dict, Optional, Union

from .base import Component, render_list, render_status
from ..api.wordpress_api import WordPressAPI
from ..security.input_validator import InputValidator, validator as default_validator
from ..services.error_handlers import ErrorContext, UnifiedErrorHandler
from ..services.exceptions import HeadlessAdminError
from ..utils.constants import Constants, DefaultValues
from ..utils.utils import format_wp_date, html_to_text, safe_get_nested, truncate

logger = logging.getLogger(__name__)


class Post(Component):
    """
    投稿1件の詳細

    一覧の各行も render_item() で描画する。
    """

    def __init__(self, client: WordPressAPI, post_id: int):
        super().__init__(client)
        self.post_id = post_id
        self.post = self.use_resource(f'posts/{post_id}', default=lambda: None)

    @staticmethod
    def title_of(post: Dict[str, Any]) -> str:
        return html_to_text(safe_get_nested(post, 'title', 'rendered')) or DefaultValues.UNTITLED

    @classmethod
    def render_item(cls, post: Dict[str, Any]) -> str:
        """一覧用の1項目"""
        line = f"[{post.get('id', '')}] {format_wp_date(post.get('date'))}  {cls.title_of(post)}"
        status = post.get('status')
        if status and status != 'publish':
            line += f" ({status})"

        excerpt = html_to_text(safe_get_nested(post, 'excerpt', 'rendered'))
        if excerpt:
            line += f"\n     {truncate(excerpt, Constants.EXCERPT_LENGTH)}"
        return line

    def render(self) -> str:
        status = render_status(self.post, expected=dict)
        if status is not None:
            return status

        post = self.post.data
        lines = [
            f"# {self.title_of(post)}",
            f"ID: {post.get('id', self.post_id)}  日付: {format_wp_date(post.get('date'))}  状態: {post.get('status', '')}",
        ]
        if post.get('link'):
            lines.append(post['link'])
        lines.append('')
        lines.append(html_to_text(safe_get_nested(post, 'content', 'rendered')))
        return '\n'.join(lines)


class Posts(Component):
    """投稿一覧"""

    title = '投稿一覧'

    def __init__(
        self,
        client: WordPressAPI,
        page: int = 1,
        per_page: int = Constants.DEFAULT_PER_PAGE,
        search: Optional[str] = None,
        status: Optional[str] = None
    ):
        super().__init__(client)
        self.posts = self.use_resource(
            'posts',
            params=client.list_params(page, per_page, search=search, status=status)
        )

    def render(self) -> str:
        return self._with_heading(render_list(self.posts, Post.render_item, DefaultValues.EMPTY_POSTS))


class PostForm(Component):
    """
    新規投稿フォーム

    マウント時の取得はない。submit() の結果を render() で表示する。
    """

    title = '新規投稿'

    FIELDS = ('title', 'content', 'excerpt', 'slug', 'post-status')

    def __init__(self, client: WordPressAPI, validator: Optional[InputValidator] = None):
        super().__init__(client)
        self.validator = validator or default_validator
        self.result: Optional[Dict[str, Union[bool, int, str]]] = None

    def submit(
        self,
        title: Optional[str],
        content: Optional[str],
        status: Optional[str] = None,
        excerpt: Optional[str] = None,
        slug: Optional[str] = None
    ) -> Dict[str, Union[bool, int, str]]:
        """
        入力を検証してWordPressに投稿する

        Returns:
            投稿結果の辞書 (success, post_id, post_url, status, error)
        """
        try:
            fields = self.validator.validate_post_input(title, content, status=status, excerpt=excerpt, slug=slug)
            created = self.client.create_post(**fields)
        except HeadlessAdminError as e:
            message = UnifiedErrorHandler.handle_error(e, ErrorContext('post_form.submit', endpoint='posts'))
            self.result = {
                "success": False,
                "error": message
            }
        else:
            self.result = {
                "success": True,
                "post_id": created.get('id'),
                "post_url": created.get('link', ''),
                "status": created.get('status', fields['status'])
            }
            logger.info(f"投稿を作成しました: ID {self.result['post_id']}")

        return self.result

    def render(self) -> str:
        if self.result is None:
            usage = "\n".join(f"  --{field}" for field in self.FIELDS)
            return self._with_heading(f"次の項目を指定して --create で投稿します:\n{usage}")

        if self.result["success"]:
            body = f"投稿を作成しました: ID {self.result['post_id']} ({self.result['status']})"
            if self.result.get('post_url'):
                body += f"\n{self.result['post_url']}"
        else:
            body = f"Error: {self.result['error']}"
        return self._with_heading(body)
