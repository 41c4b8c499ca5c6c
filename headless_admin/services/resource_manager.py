"""
リソース管理のためのユーティリティ
"""
import logging

import requests

logger = logging.getLogger(__name__)


class SessionMixin:
    """セッション管理のためのミックスイン"""
    
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._session = None
    
    @property
    def session(self) -> requests.Session:
        """遅延初期化されたセッション"""
        if self._session is None:
            self._session = requests.Session()
            self._configure_session(self._session)
        return self._session
    
    def _configure_session(self, session: requests.Session) -> None:
        """サブクラスで認証やヘッダーを設定するためのフック"""
    
    def close_session(self):
        """セッションのクリーンアップ"""
        if self._session:
            self._session.close()
            self._session = None
            logger.debug(f"{self.__class__.__name__} session closed")
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_session()
