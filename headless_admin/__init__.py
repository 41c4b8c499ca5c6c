"""
ヘッドレスWordPress管理クライアント

ディレクトリ構造:
- api/: WordPress REST API クライアント
- core/: データ取得・ルーティング・アプリケーション本体
- ui/: 画面コンポーネント (Header, Sidebar, Posts, Post, Projects, Profiles)
- services/: システムサービス (エラーハンドリング, リソース管理)
- security/: 入力検証・サニタイゼーション
- utils/: ユーティリティ関数と定数
- config/: 設定管理
"""

__version__ = "0.1.0"
