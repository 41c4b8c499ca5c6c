"""
WordPress REST API クライアント
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import requests

from ..utils.constants import Constants, ErrorMessages
from ..services.exceptions import WordPressAPIError
from ..services.resource_manager import SessionMixin
from ..utils.utils import parse_int_header, retry_on_exception


logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """GET 1回分の結果（JSON本体とページネーション情報）"""
    data: Any
    total: Optional[int] = None
    total_pages: Optional[int] = None


class WordPressAPI(SessionMixin):
    """WordPress REST API クライアント"""

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = Constants.API_TIMEOUT,
        custom_post_type: str = Constants.DEFAULT_CUSTOM_POST_TYPE
    ):
        """
        WordPress REST APIクライアントの初期化

        Args:
            url: WordPressサイトのURL
            username: ユーザー名（公開データの閲覧のみなら不要）
            password: アプリケーションパスワード
            timeout: リクエストのタイムアウト（秒）
            custom_post_type: カスタム投稿タイプのRESTベース名
        """
        super().__init__()
        self.site_url = url.rstrip('/')
        self.index_url = f"{self.site_url}/{Constants.WP_JSON_PATH}"
        self.api_url = f"{self.index_url}/{Constants.WP_API_VERSION}"
        self.username = username
        self._password = password
        self.timeout = timeout
        self.custom_post_type = custom_post_type

        logger.info(f"WordPress API client initialized for: {self.site_url}")

    @property
    def is_authenticated(self) -> bool:
        """認証情報が設定されているか"""
        return bool(self.username and self._password)

    def _configure_session(self, session: requests.Session) -> None:
        """認証とヘッダーを設定"""
        if self.is_authenticated:
            session.auth = (self.username, self._password)
        session.headers.update({
            'Accept': 'application/json',
        })

    def _build_url(self, endpoint: str) -> str:
        """エンドポイント文字列をURLに変換（絶対URLはそのまま）"""
        if endpoint.startswith(('http://', 'https://')):
            return endpoint
        return f"{self.api_url}/{endpoint.lstrip('/')}"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """
        HTTPリクエストを送信し、2xx以外はWordPressAPIErrorにする

        Raises:
            WordPressAPIError: 通信失敗または2xx以外の応答
        """
        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error {method} {url}: {e}")
            raise WordPressAPIError(f"{ErrorMessages.NETWORK} ({e})", code='network_error') from e

        if not response.ok:
            raise self._error_from_response(response)

        return response

    @staticmethod
    def _error_from_response(response: requests.Response) -> WordPressAPIError:
        """
        WordPressのエラー応答 {"code", "message", "data": {"status"}} を例外に変換
        """
        code = None
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            code = body.get('code')
            message = body.get('message')

        if not message:
            message = f"HTTP {response.status_code}: {response.reason or ''}".strip()

        logger.error(f"WordPress API error: {response.status_code} {code or '-'} - {message}")
        return WordPressAPIError(message, status_code=response.status_code, code=code)

    @staticmethod
    def _parse_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise WordPressAPIError(ErrorMessages.INVALID_JSON, status_code=response.status_code) from e

    def fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> FetchResult:
        """
        エンドポイントにGETを1回送り、JSONを返す（リトライなし）

        Args:
            endpoint: v2ベースからの相対パス（"posts", "posts/12"）または絶対URL
            params: クエリパラメータ

        Returns:
            JSON本体とX-WP-Total / X-WP-TotalPagesの値

        Raises:
            WordPressAPIError: API呼び出しに失敗した場合
        """
        url = self._build_url(endpoint)
        response = self._request('GET', url, params=params)
        data = self._parse_json(response)

        result = FetchResult(
            data=data,
            total=parse_int_header(response.headers.get(Constants.HEADER_TOTAL)),
            total_pages=parse_int_header(response.headers.get(Constants.HEADER_TOTAL_PAGES))
        )
        logger.debug(f"GET {url} -> {response.status_code}")
        return result

    @staticmethod
    def list_params(
        page: int = 1,
        per_page: int = Constants.DEFAULT_PER_PAGE,
        **extra: Any
    ) -> Dict[str, Any]:
        """一覧取得用のクエリパラメータ（Noneの値は送らない）"""
        params = {'page': page, 'per_page': min(per_page, Constants.MAX_PER_PAGE)}
        params.update({key: value for key, value in extra.items() if value is not None})
        return params

    def get_posts(
        self,
        page: int = 1,
        per_page: int = Constants.DEFAULT_PER_PAGE,
        search: Optional[str] = None,
        status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """投稿一覧を取得"""
        params = self.list_params(page, per_page, search=search, status=status)
        return self.fetch_json('posts', params).data

    def get_post(self, post_id: int) -> Dict[str, Any]:
        """投稿を1件取得"""
        return self.fetch_json(f'posts/{post_id}').data

    def create_post(
        self,
        title: str,
        content: str,
        status: str = Constants.DEFAULT_POST_STATUS,
        excerpt: Optional[str] = None,
        slug: Optional[str] = None,
        categories: Optional[List[int]] = None,
        tags: Optional[List[int]] = None
    ) -> Dict[str, Any]:
        """
        WordPressに記事を投稿

        Args:
            title: 記事タイトル
            content: 記事本文
            status: 投稿ステータス
            excerpt: 抜粋
            slug: URLスラッグ
            categories: カテゴリーIDのリスト
            tags: タグIDのリスト

        Returns:
            作成された投稿のJSON

        Raises:
            WordPressAPIError: API呼び出しに失敗した場合
        """
        post_data: Dict[str, Union[str, List[int]]] = {
            'title': title,
            'content': content,
            'status': status,
        }
        if excerpt:
            post_data['excerpt'] = excerpt
        if slug:
            post_data['slug'] = slug
        if categories:
            post_data['categories'] = categories
        if tags:
            post_data['tags'] = tags

        response = self._request('POST', self._build_url('posts'), json=post_data)
        created = self._parse_json(response)
        logger.info(f"Successfully created post: {title} (ID: {created.get('id')})")
        return created

    def update_post(self, post_id: int, **fields: Any) -> Dict[str, Any]:
        """投稿を部分更新"""
        response = self._request('POST', self._build_url(f'posts/{post_id}'), json=fields)
        logger.info(f"Updated post: ID {post_id} ({', '.join(sorted(fields))})")
        return self._parse_json(response)

    def delete_post(self, post_id: int, force: bool = False) -> Dict[str, Any]:
        """
        投稿を削除

        force=False の場合はゴミ箱に移動する
        """
        response = self._request(
            'DELETE',
            self._build_url(f'posts/{post_id}'),
            params={'force': 'true'} if force else None
        )
        logger.info(f"Deleted post: ID {post_id} (force={force})")
        return self._parse_json(response)

    def get_projects(self, page: int = 1, per_page: int = Constants.DEFAULT_PER_PAGE) -> List[Dict[str, Any]]:
        """カスタム投稿タイプの一覧を取得"""
        return self.fetch_json(self.custom_post_type, self.list_params(page, per_page)).data

    def get_users(self, page: int = 1, per_page: int = Constants.DEFAULT_PER_PAGE) -> List[Dict[str, Any]]:
        """ユーザー（プロフィール）一覧を取得"""
        return self.fetch_json('users', self.list_params(page, per_page)).data

    @retry_on_exception(
        max_retries=Constants.MAX_RETRIES,
        delay=Constants.RETRY_DELAY,
        exceptions=(requests.exceptions.ConnectionError, requests.exceptions.Timeout)
    )
    def _get_current_user_raw(self) -> requests.Response:
        return self.session.get(
            self._build_url('users/me'),
            params={'context': 'edit'},
            timeout=self.timeout
        )

    def get_current_user(self) -> Dict[str, Any]:
        """
        認証中のユーザーを取得（通信エラーはリトライする）

        Raises:
            WordPressAPIError: 認証失敗・通信失敗
        """
        try:
            response = self._get_current_user_raw()
        except requests.exceptions.RequestException as e:
            raise WordPressAPIError(f"{ErrorMessages.NETWORK} ({e})", code='network_error') from e

        if not response.ok:
            raise self._error_from_response(response)
        return self._parse_json(response)

    def get_site_info(self) -> Dict[str, Any]:
        """サイトインデックス（/wp-json）を取得"""
        return self.fetch_json(self.index_url).data

    def test_connection(self) -> bool:
        """
        WordPress APIへの接続テスト

        認証情報がある場合は users/me、ない場合はサイトインデックスで確認する

        Returns:
            接続成功時True、失敗時False
        """
        try:
            if self.is_authenticated:
                user_data = self.get_current_user()
                logger.info(f"Connected as user: {user_data.get('name', 'Unknown')}")
            else:
                site = self.get_site_info()
                logger.info(f"Connected anonymously to: {site.get('name', self.site_url)}")
            return True
        except WordPressAPIError as e:
            logger.error(f"Connection test failed: {e}")
            return False
