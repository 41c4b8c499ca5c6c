"""
共通ユーティリティ関数
"""
import html
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Type

import bleach


def safe_get_nested(data: Dict[str, Any], *keys, default=None) -> Any:
    """
    安全なネストされた辞書アクセス
    
    Args:
        data: 辞書データ
        *keys: アクセスするキーのパス
        default: デフォルト値
    
    Returns:
        取得した値またはデフォルト値
    """
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def setup_logging(log_level: str = 'INFO', log_dir: str = 'logs') -> logging.Logger:
    """
    ログ設定のセットアップ
    
    画面出力と混ざらないよう、コンソールへのログは標準エラーに出す。
    
    Args:
        log_level: ログレベル
        log_dir: ログディレクトリ
    
    Returns:
        設定済みのロガー
    """
    from .constants import Constants
    
    os.makedirs(log_dir, exist_ok=True)
    
    log_file = os.path.join(log_dir, f'headless_admin_{datetime.now().strftime(Constants.LOG_DATE_FORMAT)}.log')
    
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=Constants.LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stderr)
        ]
    )
    
    return logging.getLogger('headless_admin')


def normalize_string(text: str) -> str:
    """
    文字列の正規化
    
    Args:
        text: 正規化する文字列
    
    Returns:
        前後の空白を削除し、連続空白を単一空白にした文字列
    """
    if not text:
        return ""
    
    return ' '.join(text.strip().split())


def html_to_text(rendered: Optional[str]) -> str:
    """
    WordPressの *.rendered HTMLを表示用のプレーンテキストに変換
    
    Args:
        rendered: HTML文字列
    
    Returns:
        タグ除去・エンティティ復元済みのテキスト
    """
    if not rendered:
        return ""
    
    stripped = bleach.clean(rendered, tags=[], attributes={}, strip=True)
    return normalize_string(html.unescape(stripped))


def truncate(text: str, max_length: int) -> str:
    """長いテキストを末尾に…を付けて切り詰める"""
    if len(text) <= max_length:
        return text
    return text[:max_length - 1].rstrip() + '…'


def format_wp_date(value: Optional[str]) -> str:
    """
    WordPressの日時文字列 (2024-01-15T14:30:45) を表示用に整形
    
    解析できない値はそのまま返す。
    """
    if not value:
        return ""
    
    try:
        return datetime.fromisoformat(value.replace('Z', '')).strftime('%Y-%m-%d %H:%M')
    except ValueError:
        return value


def parse_int_header(value: Optional[str]) -> Optional[int]:
    """ページネーションヘッダーを整数に変換（不正値はNone）"""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def retry_on_exception(
    max_retries: int = 3,
    delay: float = 1.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,)
):
    """
    例外発生時のリトライデコレータ
    
    Args:
        max_retries: 最大リトライ回数
        delay: リトライ間隔（秒）
        exceptions: リトライ対象の例外
    """
    import time
    from functools import wraps
    
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt < max_retries:
                        logging.getLogger(__name__).warning(
                            f"Attempt {attempt + 1} failed: {e}. Retrying in {delay}s..."
                        )
                        time.sleep(delay)
                    else:
                        logging.getLogger(__name__).error(
                            f"All {max_retries + 1} attempts failed"
                        )
            
            raise last_exception
        
        return wrapper
    
    return decorator


def mask_secret(value: Any) -> str:
    """機密値をマスクして末尾4文字のみ残す"""
    if not value:
        return "未設定"
    
    text = str(value)
    masked = '*' * min(len(text), 8)
    if len(text) > 4:
        masked += text[-4:]
    return masked
