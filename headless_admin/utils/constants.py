"""
定数定義モジュール
"""
from typing import Final


class Constants:
    """システム定数定義"""
    
    # API関連
    API_TIMEOUT: Final[int] = 30
    MAX_RETRIES: Final[int] = 2
    RETRY_DELAY: Final[float] = 1.0
    
    # 一覧表示関連
    DEFAULT_PER_PAGE: Final[int] = 10
    MAX_PER_PAGE: Final[int] = 100  # WordPress REST APIの上限
    SIDEBAR_RECENT_POSTS: Final[int] = 5
    EXCERPT_LENGTH: Final[int] = 120
    MAX_WORKERS: Final[int] = 4
    
    # WordPress関連
    WP_JSON_PATH: Final[str] = 'wp-json'
    WP_API_VERSION: Final[str] = 'wp/v2'
    DEFAULT_CUSTOM_POST_TYPE: Final[str] = 'project'
    POST_STATUSES: Final[tuple] = ('publish', 'future', 'draft', 'pending', 'private')
    DEFAULT_POST_STATUS: Final[str] = 'draft'
    
    # WordPressのページネーションヘッダー
    HEADER_TOTAL: Final[str] = 'X-WP-Total'
    HEADER_TOTAL_PAGES: Final[str] = 'X-WP-TotalPages'
    
    # ログ関連
    LOG_DATE_FORMAT: Final[str] = '%Y%m%d'
    LOG_FORMAT: Final[str] = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ErrorMessages:
    """エラーメッセージ定数"""
    
    WORDPRESS_URL_NOT_SET = "WORDPRESS_URL が設定されていません。.env を確認してください。"
    AUTH_REQUIRED = "認証が必要です。WORDPRESS_USERNAME とアプリケーションパスワードを確認してください。"
    PERMISSION_DENIED = "この操作を行う権限がありません。"
    NOT_FOUND = "リソースが見つかりません。"
    NETWORK = "サイトに接続できませんでした。"
    INVALID_JSON = "APIの応答がJSONではありません。"
    UNEXPECTED_RESPONSE = "APIの応答の形式が想定外です。"
    CONTENT_TOO_LONG = "本文が長すぎます（最大{}文字）: {}文字"
    TITLE_OR_CONTENT_REQUIRED = "タイトルまたは本文のどちらかを入力してください。"
    INVALID_STATUS = "投稿ステータスが不正です: {}"


class DefaultValues:
    """デフォルト値定義"""
    
    LOG_LEVEL = 'INFO'
    LOADING = 'Loading...'
    UNTITLED = '(無題)'
    INVALID_ITEM = "[?] (不正なデータ)"
    EMPTY_POSTS = '投稿がありません。'
    EMPTY_PROJECTS = 'プロジェクトがありません。'
    EMPTY_PROFILES = 'ユーザーがいません。'
    SITE_NAME_UNKNOWN = 'WordPress'
