#!/usr/bin/env python3
"""
設定管理・アプリケーション・CLIのテストモジュール
"""
import os

import pytest
from unittest.mock import MagicMock, patch

import main as cli
from headless_admin.api.wordpress_api import FetchResult, WordPressAPI
from headless_admin.config.simple_config_manager import SimpleConfigManager
from headless_admin.core.admin_app import AdminApp
from headless_admin.services.exceptions import ConfigurationError, WordPressAPIError
from headless_admin.utils.constants import DefaultValues, ErrorMessages


ENV_KEYS = (
    'WORDPRESS_URL', 'WORDPRESS_USERNAME', 'WORDPRESS_PASSWORD', 'WORDPRESS_CUSTOM_POST_TYPE',
    'LOG_LEVEL', 'API_TIMEOUT', 'PER_PAGE', 'MAX_WORKERS'
)


@pytest.fixture
def env(monkeypatch):
    """テスト用の環境変数（.envの読み込みがテスト外に漏れないよう複製する）"""
    monkeypatch.setattr(os, "environ", os.environ.copy())
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv('WORDPRESS_URL', 'https://wp.example.com')
    monkeypatch.setenv('WORDPRESS_USERNAME', 'admin')
    monkeypatch.setenv('WORDPRESS_PASSWORD', 'abcd efgh ijkl mnop')
    return monkeypatch


class TestSimpleConfigManager:
    """設定管理のテストクラス"""

    def test_defaults(self, env):
        config = SimpleConfigManager(env_file=None)

        assert config.wordpress.url == 'https://wp.example.com'
        assert config.wordpress.custom_post_type == 'project'
        assert config.wordpress.has_credentials is True
        assert config.system.per_page == 10
        assert config.system.api_timeout == 30.0
        assert config.system.log_level == 'INFO'

    def test_env_file_does_not_override_environment(self, env, tmp_path):
        """既存の環境変数は.envより優先"""
        env_file = tmp_path / '.env'
        env_file.write_text('WORDPRESS_URL=https://other.example.com\nPER_PAGE=25\n', encoding='utf-8')

        config = SimpleConfigManager(env_file=str(env_file))

        assert config.wordpress.url == 'https://wp.example.com'
        assert config.system.per_page == 25

    def test_missing_url(self, env):
        env.delenv('WORDPRESS_URL')

        with pytest.raises(ConfigurationError, match='WORDPRESS_URL'):
            SimpleConfigManager(env_file=None)

    def test_invalid_url(self, env):
        env.setenv('WORDPRESS_URL', 'wp.example.com')

        with pytest.raises(ConfigurationError):
            SimpleConfigManager(env_file=None)

    @pytest.mark.parametrize('value', ['0', '101', 'ten'])
    def test_invalid_per_page(self, env, value):
        env.setenv('PER_PAGE', value)

        with pytest.raises(ConfigurationError):
            SimpleConfigManager(env_file=None)

    def test_summary_masks_password(self, env):
        summary = SimpleConfigManager(env_file=None).get_config_summary()

        assert summary['wordpress']['username'] == 'admin'
        assert summary['wordpress']['password'] == '********mnop'
        assert 'abcd' not in str(summary)

    def test_summary_unset_password(self, env):
        env.delenv('WORDPRESS_PASSWORD')

        summary = SimpleConfigManager(env_file=None).get_config_summary()

        assert summary['wordpress']['password'] == '未設定'


def fake_fetch(endpoint, params=None):
    """エンドポイントごとの応答"""
    if endpoint.endswith('/wp-json'):
        return FetchResult({'name': 'Demo Site', 'description': 'Just another WordPress site'})
    if endpoint == 'posts':
        return FetchResult([
            {'id': 1, 'date': '2024-01-15T14:30:45', 'status': 'publish', 'title': {'rendered': 'Hello world!'}},
            {'id': 2, 'date': '2024-01-16T14:30:45', 'status': 'publish', 'title': {'rendered': 'Second'}},
        ], total=2, total_pages=1)
    if endpoint == 'users':
        raise WordPressAPIError('Sorry, you are not allowed to list users.', status_code=401, code='rest_user_cannot_view')
    raise WordPressAPIError('No route was found matching the URL and request method.', status_code=404, code='rest_no_route')


class TestAdminApp:
    """AdminApp のテストクラス"""

    @pytest.fixture
    def app(self, env):
        with patch('headless_admin.core.admin_app.setup_logging', return_value=MagicMock()):
            app = AdminApp(env_file=None)
        yield app
        app.close()

    def test_init(self, app):
        assert app.client.api_url == 'https://wp.example.com/wp-json/wp/v2'
        assert app.client.is_authenticated is True
        assert app.client.timeout == 30.0

    def test_init_configuration_error(self, env):
        env.delenv('WORDPRESS_URL')

        with pytest.raises(ConfigurationError):
            AdminApp(env_file=None)

    @patch.object(WordPressAPI, 'fetch_json', side_effect=fake_fetch)
    def test_render_home(self, mock_fetch, app):
        """ホームは Header / Sidebar / 投稿一覧"""
        text = app.render('/')

        assert text.startswith('=== Demo Site ===')
        assert '* ホーム: /' in text
        assert '## 投稿一覧' in text
        assert '[1] 2024-01-15 14:30  Hello world!' in text
        assert DefaultValues.LOADING not in text
        # Header, Sidebar, メインの3回
        assert mock_fetch.call_count == 3
        assert ('posts', {'page': 1, 'per_page': 10}) in [c[0] for c in mock_fetch.call_args_list]

    @patch.object(WordPressAPI, 'fetch_json', side_effect=fake_fetch)
    def test_render_list_options(self, mock_fetch, app):
        app.render('/posts', page=2, per_page=5, search='hello')

        assert ('posts', {'page': 2, 'per_page': 5, 'search': 'hello'}) in [c[0] for c in mock_fetch.call_args_list]

    @patch.object(WordPressAPI, 'fetch_json', side_effect=fake_fetch)
    def test_render_error_in_main_only(self, mock_fetch, app):
        """メインの失敗はメイン部分にだけ表示される"""
        text = app.render('/profiles')

        assert text.startswith('=== Demo Site ===')
        assert 'Hello world!' in text
        assert f"Error: {ErrorMessages.AUTH_REQUIRED}" in text

    @patch.object(WordPressAPI, 'fetch_json', side_effect=fake_fetch)
    def test_render_not_found(self, mock_fetch, app):
        text = app.render('/nowhere')

        assert '404' in text
        assert '/nowhere' in text
        assert mock_fetch.call_count == 2

    @pytest.mark.parametrize('path, known', [
        ('/', True),
        ('/posts/12', True),
        ('/posts/new/', True),
        ('/nowhere', False),
        ('/posts/hello', False),
    ])
    def test_is_known_path(self, app, path, known):
        assert app.is_known_path(path) is known

    @patch.object(WordPressAPI, 'create_post', return_value={'id': 5, 'link': 'https://wp.example.com/?p=5', 'status': 'draft'})
    def test_create_post(self, mock_create, app):
        result = app.create_post('Title', '<p>Body</p>')

        assert result['success'] is True
        assert result['post_id'] == 5
        mock_create.assert_called_once_with(title='Title', content='<p>Body</p>', status='draft')

    @patch.object(WordPressAPI, 'test_connection', return_value=True)
    def test_get_status(self, mock_connection, app):
        status = app.get_status()

        assert status['connected'] is True
        assert status['authenticated'] is True
        assert status['config']['wordpress']['password'].endswith('mnop')
        assert '/posts/<int:post_id>' in status['routes']


class TestMain:
    """CLIのテストクラス"""

    @pytest.fixture
    def mock_app(self):
        with patch.object(cli, 'AdminApp') as app_class:
            app = app_class.return_value.__enter__.return_value
            yield app_class, app

    def test_render_path(self, mock_app, capsys):
        app_class, app = mock_app
        app.render.return_value = 'RENDERED'

        assert cli.main(['/posts/12']) == 0

        app.render.assert_called_once_with('/posts/12', page=None, per_page=None, search=None)
        assert 'RENDERED' in capsys.readouterr().out

    def test_create(self, mock_app):
        app_class, app = mock_app
        app.create_post.return_value = {'success': True, 'post_id': 9, 'post_url': '', 'status': 'publish'}

        code = cli.main(['--create', '--title', 'T', '--content', 'C', '--post-status', 'publish'])

        assert code == 0
        app.create_post.assert_called_once_with('T', 'C', status='publish', excerpt=None, slug=None)

    def test_create_failure(self, mock_app, capsys):
        app_class, app = mock_app
        app.create_post.return_value = {'success': False, 'error': 'nope'}

        assert cli.main(['--create', '--title', 'T']) == 1
        assert 'nope' in capsys.readouterr().err

    def test_status(self, mock_app):
        app_class, app = mock_app

        assert cli.main(['--status']) == 0
        app.display_status.assert_called_once()

    def test_status_does_not_consume_path(self, mock_app):
        """--status の後のパスは投稿ステータスとして扱わない"""
        app_class, app = mock_app

        assert cli.main(['--status', '/profiles']) == 0

        app.display_status.assert_called_once()
        app.render.assert_not_called()

    @pytest.mark.parametrize('argv', [
        ['--post-status', 'draft'],
        ['/posts', '--title', 'T'],
    ])
    def test_create_options_require_create(self, mock_app, argv, capsys):
        """投稿用オプションは --create なしでは使えない"""
        app_class, app = mock_app

        with pytest.raises(SystemExit) as exc_info:
            cli.main(argv)

        assert exc_info.value.code == 2
        assert '--create' in capsys.readouterr().err
        app_class.assert_not_called()

    def test_unknown_path_exit_code(self, mock_app, capsys):
        """未定義のパスは404を表示して終了コード1"""
        app_class, app = mock_app
        app.render.return_value = '404 ページが見つかりません: /nowhere'
        app.is_known_path.return_value = False

        assert cli.main(['/nowhere']) == 1

        app.is_known_path.assert_called_once_with('/nowhere')
        assert '404' in capsys.readouterr().out

    def test_test_connection(self, mock_app):
        app_class, app = mock_app
        app.test_connection.return_value = False

        assert cli.main(['--test-connection']) == 1

    def test_configuration_error(self, capsys):
        with patch.object(cli, 'AdminApp', side_effect=ConfigurationError('WORDPRESS_URL missing')):
            assert cli.main([]) == 1
        assert '設定エラー' in capsys.readouterr().err
