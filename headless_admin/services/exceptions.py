"""
カスタム例外クラス定義
"""
from typing import Optional


class HeadlessAdminError(Exception):
    """管理クライアントの基底例外クラス"""
    pass


class ConfigurationError(HeadlessAdminError):
    """設定関連のエラー"""
    pass


class APIError(HeadlessAdminError):
    """API関連のエラー"""
    pass


class WordPressAPIError(APIError):
    """WordPress API関連のエラー"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @property
    def is_network_error(self) -> bool:
        """HTTP応答を受け取れなかったエラーか"""
        return self.status_code is None and self.code == 'network_error'


class ValidationError(HeadlessAdminError):
    """入力検証のエラー"""
    pass
