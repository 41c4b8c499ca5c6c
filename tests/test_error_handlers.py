#!/usr/bin/env python3
"""
エラーハンドラーのテストモジュール
"""
import pytest

from headless_admin.services.error_handlers import (
    ErrorCategory, ErrorContext, ErrorSeverity, UnifiedErrorHandler, describe_error
)
from headless_admin.services.exceptions import ConfigurationError, ValidationError, WordPressAPIError
from headless_admin.utils.constants import ErrorMessages


class TestUnifiedErrorHandler:
    """UnifiedErrorHandler のテストクラス"""

    @pytest.mark.parametrize('status_code, category', [
        (401, ErrorCategory.AUTHENTICATION_ERROR),
        (403, ErrorCategory.PERMISSION_ERROR),
        (404, ErrorCategory.NOT_FOUND_ERROR),
        (500, ErrorCategory.API_ERROR),
    ])
    def test_categorize_http(self, status_code, category):
        error = WordPressAPIError('message', status_code=status_code)
        assert UnifiedErrorHandler.categorize(error) == category

    def test_categorize_other(self):
        assert UnifiedErrorHandler.categorize(WordPressAPIError('x', code='network_error')) == ErrorCategory.NETWORK_ERROR
        assert UnifiedErrorHandler.categorize(ConfigurationError('x')) == ErrorCategory.CONFIGURATION_ERROR
        assert UnifiedErrorHandler.categorize(ValidationError('x')) == ErrorCategory.VALIDATION_ERROR
        assert UnifiedErrorHandler.categorize(RuntimeError('x')) == ErrorCategory.SYSTEM_ERROR

    def test_severity(self):
        assert UnifiedErrorHandler.severity_of(ErrorCategory.CONFIGURATION_ERROR) == ErrorSeverity.CRITICAL
        assert UnifiedErrorHandler.severity_of(ErrorCategory.VALIDATION_ERROR) == ErrorSeverity.WARNING
        assert UnifiedErrorHandler.severity_of(ErrorCategory.NOT_FOUND_ERROR) == ErrorSeverity.ERROR

    def test_describe_adds_wordpress_message(self):
        error = WordPressAPIError('Sorry, you are not allowed to do that.', status_code=403, code='rest_forbidden')

        assert describe_error(error) == f"{ErrorMessages.PERMISSION_DENIED} (Sorry, you are not allowed to do that.)"

    def test_describe_network_hides_details(self):
        error = WordPressAPIError('HTTPSConnectionPool(...): Max retries exceeded', code='network_error')

        assert describe_error(error) == ErrorMessages.NETWORK

    def test_describe_plain_api_error(self):
        assert describe_error(WordPressAPIError('HTTP 500: Internal Server Error', status_code=500)) == 'HTTP 500: Internal Server Error'

    def test_handle_error_logs_and_returns_message(self, caplog):
        error = WordPressAPIError('Invalid post ID.', status_code=404)

        with caplog.at_level('ERROR', logger='headless_admin.services.error_handlers'):
            message = UnifiedErrorHandler.handle_error(error, ErrorContext('resource.load', endpoint='posts/9'))

        assert message.startswith(ErrorMessages.NOT_FOUND)
        assert 'ERROR in resource.load' in caplog.text

    def test_context_to_dict(self):
        context = ErrorContext('post_form.submit', endpoint='posts', additional_info={'title': 'x'})

        assert context.to_dict() == {
            'operation': 'post_form.submit',
            'endpoint': 'posts',
            'additional_info': {'title': 'x'}
        }
