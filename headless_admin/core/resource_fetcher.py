"""
共有データ取得プリミティブ

エンドポイント文字列を受け取り、GETを1回送ってJSONを自分の状態に保存する。
キャッシュ・重複排除・リトライ・キャンセルは行わない。
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..api.wordpress_api import WordPressAPI
from ..services.error_handlers import ErrorContext, UnifiedErrorHandler
from ..services.exceptions import HeadlessAdminError
from ..utils.constants import Constants

logger = logging.getLogger(__name__)


class EndpointResource:
    """1つのエンドポイントの取得状態 (data / loading / error)"""

    def __init__(
        self,
        client: WordPressAPI,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        default: Callable[[], Any] = list
    ):
        """
        Args:
            client: WordPress APIクライアント
            endpoint: 取得先（"posts", "posts/12", 絶対URL）
            params: クエリパラメータ
            default: 最初の応答が届くまでのdataを作る関数
        """
        self.client = client
        self.endpoint = endpoint
        self.params = params
        self.data: Any = default()
        self.loading = True
        self.error: Optional[str] = None
        self.total: Optional[int] = None
        self.total_pages: Optional[int] = None

    @property
    def loaded(self) -> bool:
        """最初の応答（成功・失敗問わず）が届いたか"""
        return not self.loading

    def load(self) -> 'EndpointResource':
        """
        GETを1回実行して状態を更新する

        失敗時は例外を送出せず、表示用のメッセージをerrorに保存する。
        """
        try:
            result = self.client.fetch_json(self.endpoint, self.params)
        except HeadlessAdminError as e:
            self.error = UnifiedErrorHandler.handle_error(
                e, ErrorContext('resource.load', endpoint=self.endpoint, additional_info={'params': self.params})
            )
        else:
            self.data = result.data
            self.total = result.total
            self.total_pages = result.total_pages
            self.error = None
        finally:
            self.loading = False

        return self

    def __repr__(self) -> str:
        state = 'loading' if self.loading else ('error' if self.error else 'ready')
        return f"<EndpointResource {self.endpoint} {state}>"


def mount_all(resources: Iterable[EndpointResource], max_workers: int = Constants.MAX_WORKERS) -> List[EndpointResource]:
    """
    複数のリソースを並行して読み込む

    取得順序は保証しない。各リソースは自分の状態のみ更新する。

    Args:
        resources: 読み込むリソース
        max_workers: 同時実行数の上限

    Returns:
        渡されたリソース（読み込み済み）
    """
    resources = list(resources)
    pending = [resource for resource in resources if resource.loading]
    if not pending:
        return resources

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(pending)))) as executor:
        futures = [executor.submit(resource.load) for resource in pending]
        for future in as_completed(futures):
            # load()は取得エラーを自分で状態に保存する
            future.result()

    logger.debug(f"Mounted {len(pending)} resources")
    return resources
