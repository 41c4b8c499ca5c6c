"""
コンポーネント基底クラス
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from ..api.wordpress_api import WordPressAPI
from ..core.resource_fetcher import EndpointResource
from ..utils.constants import DefaultValues, ErrorMessages

logger = logging.getLogger(__name__)


class Component:
    """
    画面コンポーネントの基底クラス

    mount() で自分のリソースを読み込み、render() でテキストを返す。
    読み込み前は Loading 表示、失敗時はエラーメッセージを表示する。
    """

    title: str = ''

    def __init__(self, client: WordPressAPI):
        self.client = client
        self._resources: List[EndpointResource] = []

    def use_resource(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        default: Callable[[], Any] = list
    ) -> EndpointResource:
        """コンポーネントが所有するリソースを作成して登録する"""
        resource = EndpointResource(self.client, endpoint, params=params, default=default)
        self._resources.append(resource)
        return resource

    @property
    def resources(self) -> List[EndpointResource]:
        return list(self._resources)

    def mount(self) -> 'Component':
        """未読み込みのリソースを順に読み込む"""
        for resource in self._resources:
            if resource.loading:
                resource.load()
        return self

    def render(self) -> str:
        raise NotImplementedError

    def _with_heading(self, body: str) -> str:
        if not self.title:
            return body
        return f"## {self.title}\n{body}"


def render_status(resource: EndpointResource, expected: Optional[type] = None) -> Optional[str]:
    """
    読み込み中・エラーの場合の表示を返す（表示できる状態ならNone）

    Args:
        resource: 対象リソース
        expected: dataに期待する型（違えば形式エラーとして表示）
    """
    if resource.loading:
        return DefaultValues.LOADING
    if resource.error:
        return f"Error: {resource.error}"
    if expected is not None and not isinstance(resource.data, expected):
        logger.warning(f"Unexpected response shape from {resource.endpoint}: {type(resource.data).__name__}")
        return f"Error: {ErrorMessages.UNEXPECTED_RESPONSE}"
    return None


def render_list(
    resource: EndpointResource,
    render_item: Callable[[Dict[str, Any]], str],
    empty_message: str
) -> str:
    """
    一覧リソースを描画する（配列の要素ごとに1項目）

    Args:
        resource: 一覧リソース
        render_item: 1要素を描画する関数
        empty_message: 空配列時の表示
    """
    status = render_status(resource, expected=list)
    if status is not None:
        return status

    items = resource.data
    if not items:
        return empty_message

    # オブジェクト以外の要素もプレースホルダーで1行として数える
    lines = [
        render_item(item) if isinstance(item, dict) else DefaultValues.INVALID_ITEM
        for item in items
    ]
    params = resource.params or {}
    if resource.total_pages and 'page' in params:
        page = params['page']
        lines.append(f"Page {page} of {resource.total_pages} ({resource.total}件)")
    return '\n'.join(lines)
