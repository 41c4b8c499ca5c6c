"""
ヘッドレスWordPress管理アプリケーション本体
"""
import logging
from typing import Any, Dict, Optional, Union

from ..api.wordpress_api import WordPressAPI
from ..config.simple_config_manager import SimpleConfigManager
from ..services.exceptions import ConfigurationError
from ..ui import Header, NotFound, Post, PostForm, Posts, Profiles, Projects, Sidebar, render_layout
from ..ui.base import Component
from ..utils.utils import setup_logging
from .resource_fetcher import mount_all
from .router import Route, Router, normalize_path


logger = logging.getLogger(__name__)


def build_router() -> Router:
    """
    ルートテーブルを作成

    各ファクトリは (client, params, options) を受け取りコンポーネントを返す。
    /posts/new は /posts/<int:post_id> より先に登録する。
    """
    def list_options(options: Dict[str, Any]) -> Dict[str, Any]:
        return {key: options[key] for key in ('page', 'per_page', 'search') if options.get(key) is not None}

    router = Router(Route(
        '/404', 'not_found',
        lambda client, params, options: NotFound(client, path=params.get('path', ''))
    ))
    router.add(Route(
        '/', 'home',
        lambda client, params, options: Posts(client, **list_options(options)),
        label='ホーム', nav=True
    ))
    router.add(Route(
        '/posts', 'posts',
        lambda client, params, options: Posts(client, **list_options(options)),
        label='投稿', nav=True
    ))
    router.add(Route(
        '/posts/new', 'post_new',
        lambda client, params, options: PostForm(client),
        label='新規投稿', nav=True
    ))
    router.add(Route(
        '/posts/<int:post_id>', 'post_detail',
        lambda client, params, options: Post(client, post_id=params['post_id'])
    ))
    router.add(Route(
        '/projects', 'projects',
        lambda client, params, options: Projects(client, **list_options(options)),
        label='プロジェクト', nav=True
    ))
    router.add(Route(
        '/profiles', 'profiles',
        lambda client, params, options: Profiles(client, **list_options(options)),
        label='プロフィール', nav=True
    ))
    return router


class AdminApp:
    """ヘッドレスWordPress管理アプリケーション"""

    def __init__(self, env_file: Optional[str] = '.env', verbose: bool = False):
        """
        アプリケーションの初期化

        Args:
            env_file: .envファイルのパス
            verbose: 詳細ログを出力するか

        Raises:
            ConfigurationError: 設定に問題がある場合
        """
        self.verbose = verbose
        try:
            self.config = SimpleConfigManager(env_file)

            log_level = 'DEBUG' if verbose else self.config.system.log_level
            self.logger = setup_logging(log_level)
            self.logger.info(f"設定概要: {self.config.get_config_summary()}")

            wp = self.config.wordpress
            self.client = WordPressAPI(
                url=wp.url,
                username=wp.username or None,
                password=wp.password or None,
                timeout=self.config.system.api_timeout,
                custom_post_type=wp.custom_post_type
            )
            self.router = build_router()

        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"初期化エラー: {e}")
            raise ConfigurationError(f"初期化に失敗しました: {e}") from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close_session()

    def is_known_path(self, path: str) -> bool:
        """パスが NotFound 以外のルートに一致するか"""
        route, _ = self.router.resolve(path)
        return route is not self.router.not_found

    def build_page(self, path: str, **options: Any) -> Dict[str, Component]:
        """
        パスに対応する Header / Sidebar / メインのコンポーネントを作成（未マウント）
        """
        route, params = self.router.resolve(path)
        if options.get('per_page') is None:
            options['per_page'] = self.config.system.per_page

        return {
            'header': Header(self.client),
            'sidebar': Sidebar(self.client, self.router.navigation(), current_path=normalize_path(path)),
            'main': route.factory(self.client, params, options),
        }

    def render(self, path: str = '/', **options: Any) -> str:
        """
        パスの画面を描画

        Header / Sidebar / メインのリソースは並行して読み込む。

        Args:
            path: 表示するパス
            **options: page, per_page, search

        Returns:
            描画済みテキスト
        """
        page = self.build_page(path, **options)

        resources = []
        for component in page.values():
            resources.extend(component.resources)
        mount_all(resources, max_workers=self.config.system.max_workers)

        return render_layout(page['header'], page['sidebar'], page['main'])

    def create_post(
        self,
        title: Optional[str],
        content: Optional[str],
        status: Optional[str] = None,
        excerpt: Optional[str] = None,
        slug: Optional[str] = None
    ) -> Dict[str, Union[bool, int, str]]:
        """
        新規投稿を作成

        Returns:
            投稿結果の辞書 (success, post_id, post_url, status, error)
        """
        form = PostForm(self.client)
        return form.submit(title, content, status=status, excerpt=excerpt, slug=slug)

    def test_connection(self) -> bool:
        """WordPressへの接続テスト"""
        self.logger.info("=== 接続テスト開始 ===")
        connected = self.client.test_connection()
        self.logger.info(f"接続テスト結果: {'成功' if connected else '失敗'}")
        return connected

    def get_status(self) -> Dict[str, Any]:
        """設定サマリー（機密情報マスク済み）と接続状態"""
        return {
            'config': self.config.get_config_summary(),
            'authenticated': self.client.is_authenticated,
            'connected': self.client.test_connection(),
            'routes': [route.pattern for route in self.router.routes],
        }

    def display_status(self) -> None:
        """システム状態を表示"""
        status = self.get_status()
        print("=== ヘッドレスWordPress管理 ステータス ===")
        for section, values in status['config'].items():
            print(f"[{section}]")
            for key, value in values.items():
                print(f"  {key}: {value}")
        print(f"認証: {'あり' if status['authenticated'] else 'なし（公開データのみ）'}")
        print(f"接続: {'✅ OK' if status['connected'] else '❌ NG'}")
        print(f"ルート: {', '.join(status['routes'])}")

