"""
パスベースのシンプルなルーター
"""
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# <int:name> / <name> 形式のパラメータ
_PARAM_PATTERN = re.compile(r'<(?:(int):)?([a-zA-Z_][a-zA-Z0-9_]*)>')


class Route:
    """ルート定義"""

    def __init__(
        self,
        pattern: str,
        name: str,
        factory: Callable[..., Any],
        label: Optional[str] = None,
        nav: bool = False
    ):
        """
        Args:
            pattern: パスパターン（例: "/posts/<int:post_id>"）
            name: ルート名
            factory: 画面コンポーネントを作る呼び出し可能オブジェクト
            label: ナビゲーション表示名
            nav: ナビゲーションに表示するか
        """
        self.pattern = normalize_path(pattern)
        self.name = name
        self.factory = factory
        self.label = label or name
        self.nav = nav
        self._converters: Dict[str, Callable[[str], Any]] = {}
        self._regex = self._compile(self.pattern)

    def _compile(self, pattern: str) -> re.Pattern:
        regex = ''
        position = 0
        for match in _PARAM_PATTERN.finditer(pattern):
            regex += re.escape(pattern[position:match.start()])
            converter, param = match.groups()
            if converter == 'int':
                regex += rf'(?P<{param}>\d+)'
                self._converters[param] = int
            else:
                regex += rf'(?P<{param}>[^/]+)'
                self._converters[param] = str
            position = match.end()
        regex += re.escape(pattern[position:])
        return re.compile(f'^{regex}$')

    def match(self, path: str) -> Optional[Dict[str, Any]]:
        """一致すれば変換済みパラメータの辞書、しなければNone"""
        found = self._regex.match(path)
        if not found:
            return None
        return {key: self._converters[key](value) for key, value in found.groupdict().items()}

    def __repr__(self) -> str:
        return f"<Route {self.name} {self.pattern}>"


def normalize_path(path: str) -> str:
    """クエリ文字列と末尾のスラッシュを除去（"/" はそのまま）"""
    path = (path or '/').split('?', 1)[0].split('#', 1)[0].strip()
    if not path.startswith('/'):
        path = '/' + path
    if len(path) > 1:
        path = path.rstrip('/') or '/'
    return path


class Router:
    """ルートテーブル（先に登録したルートが優先）"""

    def __init__(self, not_found: Route):
        self.routes: List[Route] = []
        self.not_found = not_found

    def add(self, route: Route) -> 'Router':
        self.routes.append(route)
        return self

    def resolve(self, path: str) -> Tuple[Route, Dict[str, Any]]:
        """
        パスに一致するルートを返す

        Returns:
            (ルート, パラメータ)。一致しない場合は NotFound ルートと {"path": path}
        """
        normalized = normalize_path(path)
        for route in self.routes:
            params = route.match(normalized)
            if params is not None:
                logger.debug(f"Resolved {normalized} -> {route.name} {params}")
                return route, params

        logger.info(f"No route for path: {normalized}")
        return self.not_found, {'path': normalized}

    def navigation(self) -> List[Tuple[str, str]]:
        """ナビゲーション用の (パス, 表示名) 一覧"""
        return [(route.pattern, route.label) for route in self.routes if route.nav]
