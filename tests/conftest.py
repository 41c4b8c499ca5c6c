"""
テスト共通フィクスチャ
"""
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from headless_admin.api.wordpress_api import WordPressAPI


def make_response(status_code=200, json_data=None, headers=None, reason='OK', invalid_json=False):
    """requests.Response 相当のモックを作成"""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.headers = headers or {}
    response.text = '' if json_data is None else str(json_data)
    if invalid_json:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def wp_client():
    """匿名アクセスのテスト用クライアント"""
    return WordPressAPI(url='https://wp.example.com/')


@pytest.fixture
def sample_posts():
    """WordPress posts エンドポイント形式のサンプル"""
    return [
        {
            'id': 12,
            'date': '2024-01-15T14:30:45',
            'status': 'publish',
            'link': 'https://wp.example.com/hello-world/',
            'title': {'rendered': 'Hello &amp; World'},
            'excerpt': {'rendered': '<p>First post excerpt</p>\n'},
            'content': {'rendered': '<p>Welcome to <strong>WordPress</strong>.</p>'},
        },
        {
            'id': 13,
            'date': '2024-01-16T09:00:00',
            'status': 'draft',
            'link': 'https://wp.example.com/?p=13',
            'title': {'rendered': 'Second post'},
            'excerpt': {'rendered': ''},
            'content': {'rendered': '<p>Draft body</p>'},
        },
        {
            'id': 14,
            'date': '2024-01-17T10:15:00',
            'status': 'publish',
            'link': 'https://wp.example.com/third/',
            'title': {'rendered': ''},
            'excerpt': {'rendered': '<p>No title here</p>'},
            'content': {'rendered': ''},
        },
    ]
