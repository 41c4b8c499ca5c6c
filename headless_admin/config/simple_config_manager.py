"""
簡素化設定管理システム - .env と環境変数から読み込み
"""
import os
import logging
from typing import Optional, Dict, Any
from pathlib import Path

from dotenv import load_dotenv

from ..services.exceptions import ConfigurationError
from ..utils.constants import Constants, DefaultValues, ErrorMessages
from ..utils.utils import mask_secret

logger = logging.getLogger(__name__)


class SimpleConfigManager:
    """簡素化設定管理システム - .env直接読み込み"""
    
    SENSITIVE_KEYS = ('password', 'key', 'secret', 'token')
    
    def __init__(self, env_file: Optional[str] = ".env"):
        """
        簡素化設定管理の初期化
        
        Args:
            env_file: .envファイルパス（Noneの場合は環境変数のみ）
        
        Raises:
            ConfigurationError: 必須設定が不足・不正な場合
        """
        self.env_file = env_file
        self._config_data: Dict[str, Dict[str, Any]] = {}
        self._load_env_file()
        self._setup_configuration()
        
        logger.info("設定管理システム初期化完了")
    
    def _load_env_file(self):
        """.envファイルを読み込み（既存の環境変数は上書きしない）"""
        if self.env_file is None:
            return
        
        env_path = Path(self.env_file)
        if not env_path.exists():
            logger.warning(f".envファイルが見つかりません: {self.env_file}")
            return
        
        load_dotenv(env_path, override=False)
        logger.info(f".envファイル読み込み完了: {self.env_file}")
    
    def _setup_configuration(self):
        """環境変数から設定を構築"""
        url = os.getenv('WORDPRESS_URL', '').strip()
        if not url:
            raise ConfigurationError(ErrorMessages.WORDPRESS_URL_NOT_SET)
        if not url.startswith(('http://', 'https://')):
            raise ConfigurationError(f"WORDPRESS_URL が不正です: {url}")
        
        # WordPress 設定
        self._config_data['wordpress'] = {
            'url': url,
            'username': os.getenv('WORDPRESS_USERNAME', ''),
            'password': os.getenv('WORDPRESS_PASSWORD', ''),
            'custom_post_type': os.getenv('WORDPRESS_CUSTOM_POST_TYPE', Constants.DEFAULT_CUSTOM_POST_TYPE)
        }
        
        # システム設定
        try:
            self._config_data['system'] = {
                'log_level': os.getenv('LOG_LEVEL', DefaultValues.LOG_LEVEL),
                'api_timeout': float(os.getenv('API_TIMEOUT', str(Constants.API_TIMEOUT))),
                'per_page': int(os.getenv('PER_PAGE', str(Constants.DEFAULT_PER_PAGE))),
                'max_workers': int(os.getenv('MAX_WORKERS', str(Constants.MAX_WORKERS)))
            }
        except ValueError as e:
            raise ConfigurationError(f"数値設定が不正です: {e}")
        
        per_page = self._config_data['system']['per_page']
        if not 1 <= per_page <= Constants.MAX_PER_PAGE:
            raise ConfigurationError(f"PER_PAGE は1〜{Constants.MAX_PER_PAGE}で指定してください: {per_page}")
    
    def get(self, section: str, key: str, default: Any = None) -> Any:
        """設定値を取得"""
        return self._config_data.get(section, {}).get(key, default)
    
    def get_config_summary(self) -> Dict[str, Any]:
        """設定サマリーを取得（機密情報をマスク）"""
        summary = {}
        
        for section, config in self._config_data.items():
            summary[section] = {}
            for key, value in config.items():
                if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                    summary[section][key] = mask_secret(value)
                else:
                    summary[section][key] = value
        
        return summary
    
    @property
    def wordpress(self) -> 'WordPressConfig':
        """WordPress設定を取得"""
        return WordPressConfig(
            url=self.get('wordpress', 'url'),
            username=self.get('wordpress', 'username'),
            password=self.get('wordpress', 'password'),
            custom_post_type=self.get('wordpress', 'custom_post_type')
        )
    
    @property
    def system(self) -> 'SystemConfig':
        """システム設定を取得"""
        return SystemConfig(
            log_level=self.get('system', 'log_level'),
            api_timeout=self.get('system', 'api_timeout'),
            per_page=self.get('system', 'per_page'),
            max_workers=self.get('system', 'max_workers')
        )


class WordPressConfig:
    """WordPress設定クラス"""
    def __init__(self, url: str, username: str, password: str, custom_post_type: str):
        self.url = url
        self.username = username
        self.password = password
        self.custom_post_type = custom_post_type
    
    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


class SystemConfig:
    """システム設定クラス"""
    def __init__(self, log_level: str, api_timeout: float, per_page: int, max_workers: int):
        self.log_level = log_level
        self.api_timeout = api_timeout
        self.per_page = per_page
        self.max_workers = max_workers
