"""
統一されたエラーハンドリングシステム

画面コンポーネントは例外を送出せず、ここで作った1行のメッセージを
一覧の代わりに表示する。
"""
import logging
from typing import Any, Dict, Optional
from enum import Enum

from .exceptions import (
    ConfigurationError, ValidationError, WordPressAPIError
)
from ..utils.constants import ErrorMessages

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """エラーの重要度レベル"""
    CRITICAL = "critical"  # 処理を継続できない
    ERROR = "error"        # 表示は失敗だが続行可能
    WARNING = "warning"    # 入力ミスなど


class ErrorCategory(Enum):
    """エラーのカテゴリ"""
    AUTHENTICATION_ERROR = "auth"
    PERMISSION_ERROR = "permission"
    NOT_FOUND_ERROR = "not_found"
    API_ERROR = "api"
    NETWORK_ERROR = "network"
    CONFIGURATION_ERROR = "config"
    VALIDATION_ERROR = "validation"
    SYSTEM_ERROR = "system"


class ErrorContext:
    """エラーコンテキスト情報"""

    def __init__(
        self,
        operation: str,
        endpoint: Optional[str] = None,
        additional_info: Optional[Dict[str, Any]] = None
    ):
        self.operation = operation
        self.endpoint = endpoint
        self.additional_info = additional_info or {}

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式でコンテキスト情報を返す"""
        return {
            'operation': self.operation,
            'endpoint': self.endpoint,
            'additional_info': self.additional_info
        }


class UnifiedErrorHandler:
    """統一エラーハンドラー"""

    # HTTPステータスとカテゴリのマッピング
    STATUS_CATEGORY_MAP = {
        401: ErrorCategory.AUTHENTICATION_ERROR,
        403: ErrorCategory.PERMISSION_ERROR,
        404: ErrorCategory.NOT_FOUND_ERROR,
    }

    CATEGORY_MESSAGE_MAP = {
        ErrorCategory.AUTHENTICATION_ERROR: ErrorMessages.AUTH_REQUIRED,
        ErrorCategory.PERMISSION_ERROR: ErrorMessages.PERMISSION_DENIED,
        ErrorCategory.NOT_FOUND_ERROR: ErrorMessages.NOT_FOUND,
        ErrorCategory.NETWORK_ERROR: ErrorMessages.NETWORK,
    }

    @classmethod
    def categorize(cls, error: Exception) -> ErrorCategory:
        """例外をカテゴリに分類"""
        if isinstance(error, WordPressAPIError):
            if error.is_network_error:
                return ErrorCategory.NETWORK_ERROR
            return cls.STATUS_CATEGORY_MAP.get(error.status_code, ErrorCategory.API_ERROR)
        if isinstance(error, ConfigurationError):
            return ErrorCategory.CONFIGURATION_ERROR
        if isinstance(error, (ValidationError, ValueError)):
            return ErrorCategory.VALIDATION_ERROR
        if isinstance(error, (ConnectionError, TimeoutError)):
            return ErrorCategory.NETWORK_ERROR
        return ErrorCategory.SYSTEM_ERROR

    @classmethod
    def severity_of(cls, category: ErrorCategory) -> ErrorSeverity:
        if category in (ErrorCategory.CONFIGURATION_ERROR, ErrorCategory.SYSTEM_ERROR):
            return ErrorSeverity.CRITICAL
        if category == ErrorCategory.VALIDATION_ERROR:
            return ErrorSeverity.WARNING
        return ErrorSeverity.ERROR

    @classmethod
    def describe(cls, error: Exception) -> str:
        """
        ユーザーに表示する1行のエラーメッセージを作成

        Args:
            error: 発生したエラー

        Returns:
            表示用メッセージ
        """
        category = cls.categorize(error)
        base = cls.CATEGORY_MESSAGE_MAP.get(category)

        if base is None:
            return str(error) or type(error).__name__

        # WordPress側のメッセージがあれば補足として付ける
        if isinstance(error, WordPressAPIError) and category != ErrorCategory.NETWORK_ERROR:
            if error.message and error.message not in base:
                return f"{base} ({error.message})"
        return base

    @classmethod
    def handle_error(cls, error: Exception, context: ErrorContext) -> str:
        """
        エラーをログに出力し、表示用メッセージを返す

        Args:
            error: 発生したエラー
            context: エラーコンテキスト

        Returns:
            表示用メッセージ
        """
        category = cls.categorize(error)
        severity = cls.severity_of(category)
        log_data = {
            'error_type': type(error).__name__,
            'severity': severity.value,
            'category': category.value,
            'context': context.to_dict()
        }

        if severity == ErrorSeverity.CRITICAL:
            logger.critical(f"CRITICAL ERROR in {context.operation}: {error}", extra=log_data, exc_info=True)
        elif severity == ErrorSeverity.ERROR:
            logger.error(f"ERROR in {context.operation}: {error}", extra=log_data)
        else:
            logger.warning(f"WARNING in {context.operation}: {error}", extra=log_data)

        return cls.describe(error)


def describe_error(error: Exception) -> str:
    """表示用エラーメッセージ（UnifiedErrorHandler.describe の短縮形）"""
    return UnifiedErrorHandler.describe(error)
