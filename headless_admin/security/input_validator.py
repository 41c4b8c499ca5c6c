"""
入力検証・サニタイゼーションシステム
"""
import re
import html
import logging
from typing import Any, Dict, Optional

import bleach

from ..services.exceptions import ValidationError
from ..utils.constants import Constants, ErrorMessages

logger = logging.getLogger(__name__)


class InputValidator:
    """新規投稿フォームの入力検証・サニタイゼーション"""

    # 許可されるHTMLタグ（WordPress投稿用）
    ALLOWED_HTML_TAGS = [
        'p', 'br', 'strong', 'em', 'u', 'h2', 'h3', 'h4', 'h5', 'h6',
        'ul', 'ol', 'li', 'blockquote', 'a', 'img', 'div', 'span', 'code', 'pre'
    ]

    # 許可されるHTML属性
    ALLOWED_HTML_ATTRIBUTES = {
        'a': ['href', 'title', 'target', 'rel'],
        'img': ['src', 'alt', 'title', 'width', 'height'],
        'div': ['class', 'id'],
        'span': ['class', 'id']
    }

    ALLOWED_PROTOCOLS = ['http', 'https', 'mailto']

    MAX_TITLE_LENGTH = 200
    MAX_EXCERPT_LENGTH = 1000
    MAX_CONTENT_LENGTH = 50000

    SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

    def sanitize_content(self, content: Optional[str]) -> str:
        """
        記事本文のサニタイゼーション

        許可リスト外のタグは除去し、scriptやstyleの中身も落とす。

        Args:
            content: 記事本文（HTML）

        Returns:
            サニタイズされた本文

        Raises:
            ValidationError: サニタイズ後の本文が上限を超える場合
        """
        if not content or not isinstance(content, str):
            return ""

        # bleachはscript/styleのタグだけを除去し中身を残すため先に落とす
        content = re.sub(r'<(script|style)[^>]*>.*?</\1\s*>', '', content, flags=re.IGNORECASE | re.DOTALL)

        sanitized = bleach.clean(
            content,
            tags=self.ALLOWED_HTML_TAGS,
            attributes=self.ALLOWED_HTML_ATTRIBUTES,
            protocols=self.ALLOWED_PROTOCOLS,
            strip=True
        )
        sanitized = self._remove_control_characters(sanitized).strip()

        # 上限を超える本文は切り詰めずに拒否する
        if len(sanitized) > self.MAX_CONTENT_LENGTH:
            raise ValidationError(ErrorMessages.CONTENT_TOO_LONG.format(self.MAX_CONTENT_LENGTH, len(sanitized)))

        return sanitized

    def sanitize_text_field(self, text: Any, max_length: int = 500) -> str:
        """テキストフィールドのサニタイゼーション（タグ・制御文字を除去）"""
        if not text:
            return ""

        text_str = bleach.clean(str(text), tags=[], attributes={}, strip=True)
        text_str = html.unescape(text_str)
        text_str = self._remove_control_characters(text_str).strip()

        return text_str[:max_length]

    def validate_post_input(
        self,
        title: Optional[str],
        content: Optional[str],
        status: Optional[str] = None,
        excerpt: Optional[str] = None,
        slug: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        新規投稿の入力を検証してサニタイズ済みの辞書を返す

        Raises:
            ValidationError: タイトルと本文が共に空、ステータスやスラッグが不正
        """
        clean_title = self.sanitize_text_field(title, max_length=self.MAX_TITLE_LENGTH)
        clean_content = self.sanitize_content(content)

        if not clean_title and not clean_content:
            raise ValidationError(ErrorMessages.TITLE_OR_CONTENT_REQUIRED)

        status = (status or Constants.DEFAULT_POST_STATUS).strip().lower()
        if status not in Constants.POST_STATUSES:
            raise ValidationError(ErrorMessages.INVALID_STATUS.format(status))

        validated = {
            'title': clean_title,
            'content': clean_content,
            'status': status,
        }

        clean_excerpt = self.sanitize_text_field(excerpt, max_length=self.MAX_EXCERPT_LENGTH)
        if clean_excerpt:
            validated['excerpt'] = clean_excerpt

        if slug:
            slug = slug.strip().lower()
            if not self.SLUG_PATTERN.match(slug):
                raise ValidationError(f"スラッグに使用できない文字が含まれています: {slug}")
            validated['slug'] = slug

        logger.debug(f"投稿入力を検証しました: {clean_title or '(無題)'}")
        return validated

    @staticmethod
    def _remove_control_characters(text: str) -> str:
        return re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', text)


# グローバルバリデーターインスタンス
validator = InputValidator()
